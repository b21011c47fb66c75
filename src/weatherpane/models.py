from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Literal, Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    NETWORK_ERROR = "NetworkError"
    NOT_FOUND = "NotFound"
    UNAUTHORIZED = "Unauthorized"
    SERVER_ERROR = "ServerError"
    PARSE_ERROR = "ParseError"


@dataclass(slots=True, frozen=True)
class FetchError:
    kind: ErrorKind
    message: str
    status: Optional[int] = None


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Outcome of one lookup: exactly one of ``payload`` or ``error`` is meaningful."""

    location: Optional[str]
    payload: Any = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, location: str, payload: Any) -> "FetchResult":
        return cls(location=location, payload=payload)

    @classmethod
    def failure(cls, location: Optional[str], kind: ErrorKind, message: str, status: Optional[int] = None) -> "FetchResult":
        return cls(location=location, error=FetchError(kind=kind, message=message, status=status))


@dataclass(slots=True)
class Alert:
    headline: str
    event: Optional[str] = None
    severity: Optional[str] = None
    area: Optional[str] = None
    expires: Optional[datetime] = None


@dataclass(slots=True)
class AlertCollection:
    location: str
    alerts: List[Alert] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.alerts)


@dataclass(slots=True)
class WeatherReading:
    name: str
    country: str
    temp_c: Optional[float]
    humidity: Optional[float]
    description: Optional[str] = None

    @property
    def temp_f(self) -> Optional[float]:
        if self.temp_c is None:
            return None
        return self.temp_c * 9 / 5 + 32


@dataclass(slots=True)
class Block:
    role: str
    tag: str
    text: str = ""
    items: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ResultsView:
    blocks: List[Block] = field(default_factory=list)

    def find(self, role: str) -> Optional[Block]:
        for block in self.blocks:
            if block.role == role:
                return block
        return None

    def text_of(self, role: str) -> str:
        block = self.find(role)
        return block.text if block else ""


@dataclass(slots=True, frozen=True)
class DisplayState:
    mode: Literal["idle", "results", "error"]
    view: Optional[ResultsView] = None
    message: Optional[str] = None
