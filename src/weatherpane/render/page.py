from __future__ import annotations

import threading
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models import DisplayState, ResultsView

TEMPLATE_DIR = Path(__file__).parent / "templates"

PAGE_LABELS = {
    "alerts": ("Weather Alerts", "State abbreviation (e.g. TX)", "Get Alerts"),
    "city": ("Current Weather", "City name", "Get Weather"),
}


def _env() -> Environment:
    loader = FileSystemLoader(TEMPLATE_DIR)
    return Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "j2"]))


class PageDisplay:
    """In-memory page with an input, a trigger, a results region and an error region."""

    def __init__(self, kind: str = "alerts", input_value: Optional[str] = None) -> None:
        self.kind = kind
        self.input_value = input_value
        self._lock = threading.RLock()
        self._view: Optional[ResultsView] = None
        self._results_visible = False
        self._error_text = ""
        self._error_visible = False

    def show_results(self, view: ResultsView) -> None:
        with self._lock:
            self._view = view
            self._results_visible = True
            self._error_visible = False

    def show_error(self, message: str) -> None:
        with self._lock:
            self._error_text = message
            self._error_visible = True
            self._results_visible = False

    def clear(self) -> None:
        with self._lock:
            self._view = None
            self._results_visible = False
            self._error_text = ""
            self._error_visible = False

    def clear_input(self) -> None:
        with self._lock:
            self.input_value = ""

    @property
    def results_visible(self) -> bool:
        return self._results_visible

    @property
    def error_visible(self) -> bool:
        return self._error_visible

    @property
    def error_text(self) -> str:
        return self._error_text

    @property
    def view(self) -> Optional[ResultsView]:
        return self._view

    @property
    def state(self) -> DisplayState:
        with self._lock:
            if self._error_visible:
                return DisplayState(mode="error", message=self._error_text)
            if self._results_visible:
                return DisplayState(mode="results", view=self._view)
            return DisplayState(mode="idle")

    def to_html(self) -> str:
        title, placeholder, trigger_label = PAGE_LABELS.get(self.kind, PAGE_LABELS["alerts"])
        template = _env().get_template("page.html.j2")
        with self._lock:
            context = {
                "title": title,
                "placeholder": placeholder,
                "trigger_label": trigger_label,
                "input_value": self.input_value,
                "view": self._view,
                "results_visible": self._results_visible,
                "error_text": self._error_text,
                "error_visible": self._error_visible,
            }
        return template.render(**context)

    def to_text(self) -> str:
        state = self.state
        if state.mode == "error":
            return f"Error: {state.message}"
        if state.mode == "idle" or state.view is None:
            return ""
        lines: List[str] = []
        for block in state.view.blocks:
            if block.items:
                lines.extend(f"  - {item}" for item in block.items)
            elif block.text:
                lines.append(block.text)
        return "\n".join(lines)

    def write(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_html(), encoding="utf-8")
        return path
