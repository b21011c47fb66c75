from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .endpoints import ALERTS_URL, CITY_URL

DEFAULT_USER_AGENT = "weatherpane/1.0 (contact: you@example.com)"


class AppSettings(BaseModel):
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    alerts_base_url: str = Field(default=ALERTS_URL)
    city_base_url: str = Field(default=CITY_URL)
    openweather_api_key: Optional[str] = Field(default=None)
    http_timeout: float = Field(default=30.0, gt=0)
    max_workers: int = Field(default=4, ge=1)
    discard_stale: bool = Field(default=False)
    logs_dir: Path = Field(default=Path("logs"))


def _env_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _first(cli_value: Any | None, env_key: str, default: Any) -> Any:
    if cli_value is not None:
        return cli_value
    value = os.getenv(env_key)
    if value is None or value.strip() == "":
        return default
    return value


def load_settings(cli_args: dict[str, Any] | None = None) -> AppSettings:
    load_dotenv()
    cli_args = cli_args or {}

    data: dict[str, Any] = {
        "user_agent": _first(cli_args.get("user_agent"), "USER_AGENT", DEFAULT_USER_AGENT),
        "alerts_base_url": _first(cli_args.get("alerts_base_url"), "ALERTS_BASE_URL", ALERTS_URL),
        "city_base_url": _first(cli_args.get("city_base_url"), "CITY_BASE_URL", CITY_URL),
        "openweather_api_key": _first(cli_args.get("api_key"), "OPENWEATHER_API_KEY", None),
        "http_timeout": _first(cli_args.get("timeout"), "HTTP_TIMEOUT", 30.0),
        "max_workers": _first(cli_args.get("max_workers"), "MAX_WORKERS", 4),
        "discard_stale": cli_args.get("discard_stale") or _env_bool("DISCARD_STALE", False),
        "logs_dir": Path(_first(cli_args.get("logs_dir"), "LOGS_DIR", "logs")).expanduser(),
    }

    try:
        settings = AppSettings(**data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}")

    settings.logs_dir.mkdir(parents=True, exist_ok=True)
    return settings
