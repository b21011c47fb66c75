from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from ..models import Alert, AlertCollection, WeatherReading


ALERT_COLUMNS = ["location", "headline", "event", "severity", "area", "expires"]
READING_COLUMNS = ["name", "country", "temp_c", "temp_f", "humidity_pct", "description"]


def _alert_payload(location: str, alert: Alert) -> dict:
    return {
        "location": location,
        "headline": alert.headline,
        "event": alert.event or "",
        "severity": alert.severity or "",
        "area": alert.area or "",
        "expires": alert.expires.isoformat() if alert.expires else "",
    }


def write_alerts_csv(collections: Iterable[AlertCollection], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [
        _alert_payload(collection.location, alert)
        for collection in collections
        for alert in collection.alerts
    ]
    df = pd.DataFrame(records, columns=ALERT_COLUMNS)
    df.to_csv(path, index=False)
    return path


def write_readings_csv(readings: Iterable[WeatherReading], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [
        {
            "name": reading.name,
            "country": reading.country,
            "temp_c": reading.temp_c,
            "temp_f": reading.temp_f,
            "humidity_pct": reading.humidity,
            "description": reading.description or "",
        }
        for reading in readings
    ]
    df = pd.DataFrame(records, columns=READING_COLUMNS)
    df.to_csv(path, index=False)
    return path
