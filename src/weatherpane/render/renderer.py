from __future__ import annotations

import logging
import threading
from typing import Any

from ..endpoints import EndpointShape
from ..models import Block, ResultsView
from .display import Display

LOGGER = logging.getLogger(__name__)


class Renderer:
    """Projects lookup outcomes onto a :class:`Display`.

    Both entry points are total: a payload that cannot be projected is logged
    and rendered as a placeholder view instead of raising. Each call holds
    one lock for its whole sequence of region writes, so overlapping cycles
    never interleave their mutations.
    """

    def __init__(self, display: Display, shape: EndpointShape) -> None:
        self.display = display
        self.shape = shape
        self._lock = threading.Lock()

    def _project(self, location: str, payload: Any) -> ResultsView:
        try:
            return self.shape.project(location, payload)
        except Exception:
            LOGGER.exception("Unable to project %s payload for %s", self.shape.name, location)
            return ResultsView(blocks=[Block(role="summary", tag="p", text=f"No displayable data for {location}.")])

    def render_results(self, location: str, payload: Any) -> None:
        view = self._project(location, payload)
        with self._lock:
            self.display.clear()
            self.display.show_results(view)
            if self.shape.clears_input:
                self.display.clear_input()

    def render_error(self, message: str) -> None:
        with self._lock:
            self.display.show_error(message)
