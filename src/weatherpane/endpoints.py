from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import quote

from dateutil import parser as dtparser

from .models import Alert, AlertCollection, Block, ErrorKind, ResultsView, WeatherReading


ALERTS_URL = "https://api.weather.gov/alerts/active?area="
CITY_URL = "https://api.openweathermap.org/data/2.5/weather?q="

STATUS_KINDS = {
    404: ErrorKind.NOT_FOUND,
    401: ErrorKind.UNAUTHORIZED,
}

PARSE_ERROR_MESSAGE = "Unable to read the weather service response. Please try again."


@dataclass(frozen=True)
class EndpointShape:
    """Describes one upstream API: where to send the code and how to read the reply."""

    name: str
    base_url: str
    invalid_input_message: str
    fallback_message: str
    project: Callable[[str, Any], ResultsView]
    normalize: Callable[[str], str] = str.strip
    escape: bool = False
    query_suffix: str = ""
    status_messages: Mapping[int, str] = field(default_factory=dict)
    clears_input: bool = False

    def normalize_code(self, raw: Optional[str]) -> Optional[str]:
        if raw is None:
            return None
        code = self.normalize(raw.strip())
        return code or None

    def build_url(self, code: str) -> str:
        value = quote(code, safe="") if self.escape else code
        return f"{self.base_url}{value}{self.query_suffix}"

    def classify_status(self, status: int) -> tuple[ErrorKind, str]:
        kind = STATUS_KINDS.get(status, ErrorKind.SERVER_ERROR)
        return kind, self.status_messages.get(status, self.fallback_message)


def _format_number(value: Optional[float], digits: Optional[int] = None) -> str:
    if value is None:
        return "—"
    if isinstance(value, float):
        if digits is not None:
            value = round(value, digits)
        if value.is_integer():
            return str(int(value))
    return str(value)


def _capitalize_first(text: Optional[str]) -> str:
    if not text:
        return ""
    return text[0].upper() + text[1:]


def _parse_expires(raw: Optional[str]):
    if not raw:
        return None
    try:
        return dtparser.isoparse(raw)
    except ValueError:
        return None


def parse_alerts(location: str, payload: Any) -> AlertCollection:
    features: List[Dict[str, Any]] = []
    if isinstance(payload, dict):
        features = payload.get("features") or []
    alerts: List[Alert] = []
    for feature in features:
        props = feature.get("properties") if isinstance(feature, dict) else None
        if not isinstance(props, dict):
            props = {}
        alerts.append(
            Alert(
                headline=props.get("headline") or "",
                event=props.get("event"),
                severity=props.get("severity"),
                area=props.get("areaDesc"),
                expires=_parse_expires(props.get("expires")),
            )
        )
    return AlertCollection(location=location, alerts=alerts)


def parse_reading(payload: Any) -> WeatherReading:
    payload = payload if isinstance(payload, dict) else {}
    main = payload.get("main") or {}
    weather = payload.get("weather") or [{}]
    first = weather[0] if weather and isinstance(weather[0], dict) else {}
    return WeatherReading(
        name=payload.get("name") or "",
        country=(payload.get("sys") or {}).get("country") or "",
        temp_c=main.get("temp"),
        humidity=main.get("humidity"),
        description=first.get("description"),
    )


def project_alerts(location: str, payload: Any) -> ResultsView:
    collection = parse_alerts(location, payload)
    blocks = [
        Block(
            role="summary",
            tag="h3",
            text=f"Current watches, warnings, and advisories for {location}: {collection.count}",
        )
    ]
    if collection.count > 0:
        blocks.append(Block(role="alerts", tag="ul", items=[alert.headline for alert in collection.alerts]))
    else:
        blocks.append(Block(role="empty", tag="p", text="No alerts at this time."))
    return ResultsView(blocks=blocks)


def project_reading(location: str, payload: Any) -> ResultsView:
    reading = parse_reading(payload)
    return ResultsView(
        blocks=[
            Block(role="location", tag="h2", text=f"{reading.name}, {reading.country}"),
            Block(
                role="temperature",
                tag="p",
                text=f"{_format_number(reading.temp_c)}°C / {_format_number(reading.temp_f, digits=2)}°F",
            ),
            Block(role="humidity", tag="p", text=f"{_format_number(reading.humidity)}%"),
            Block(role="description", tag="p", text=_capitalize_first(reading.description)),
        ]
    )


def alerts_shape(base_url: str = ALERTS_URL) -> EndpointShape:
    return EndpointShape(
        name="alerts",
        base_url=base_url,
        invalid_input_message="Please enter a state abbreviation.",
        fallback_message="Failed to fetch data. Please check your state code.",
        project=project_alerts,
        normalize=str.upper,
        clears_input=True,
    )


def city_shape(api_key: Optional[str], base_url: str = CITY_URL, units: str = "metric") -> EndpointShape:
    suffix = f"&units={units}"
    if api_key:
        suffix += f"&appid={quote(api_key, safe='')}"
    return EndpointShape(
        name="city",
        base_url=base_url,
        invalid_input_message="Please enter a city name.",
        fallback_message="Failed to fetch weather data. Please try again.",
        project=project_reading,
        escape=True,
        query_suffix=suffix,
        status_messages={
            404: "City not found. Please check the city name.",
            401: "Invalid API key. Please check your configuration.",
        },
    )
