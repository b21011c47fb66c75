from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest
import requests

FIXTURE_DIR = Path(__file__).parent / "fixtures"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session``: routes by URL substring, records every GET."""

    def __init__(self, routes=None, default=None) -> None:
        self.routes = dict(routes or {})
        self.default = default
        self.gates: dict[str, threading.Event] = {}
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def hold(self, marker: str) -> threading.Event:
        gate = threading.Event()
        self.gates[marker] = gate
        return gate

    def get(self, url: str, timeout=None):
        with self._lock:
            self.calls.append(url)
        for marker, gate in self.gates.items():
            if marker in url:
                gate.wait(timeout=5)
        outcome = self.default
        for marker, routed in self.routes.items():
            if marker in url:
                outcome = routed
                break
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            raise requests.ConnectionError("No route for " + url)
        return outcome


def load_fixture(name: str):
    return json.loads((FIXTURE_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def alerts_payload():
    return load_fixture("alerts_tx.json")


@pytest.fixture
def paris_payload():
    return load_fixture("city_paris.json")
