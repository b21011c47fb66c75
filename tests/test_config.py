import pytest

from weatherpane.config import DEFAULT_USER_AGENT, load_settings


def test_defaults(tmp_path, monkeypatch):
    for key in ("USER_AGENT", "OPENWEATHER_API_KEY", "HTTP_TIMEOUT", "DISCARD_STALE", "MAX_WORKERS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    settings = load_settings({"logs_dir": str(tmp_path / "logs")})
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.openweather_api_key is None
    assert settings.discard_stale is False
    assert (tmp_path / "logs").is_dir()


def test_cli_overrides_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENWEATHER_API_KEY", "from-env")
    monkeypatch.setenv("HTTP_TIMEOUT", "12")
    monkeypatch.setenv("DISCARD_STALE", "yes")
    settings = load_settings({"api_key": "from-cli", "logs_dir": str(tmp_path / "logs")})
    assert settings.openweather_api_key == "from-cli"
    assert settings.http_timeout == 12.0
    assert settings.discard_stale is True


def test_invalid_values_raise(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        load_settings({"timeout": -1, "logs_dir": str(tmp_path / "logs")})
