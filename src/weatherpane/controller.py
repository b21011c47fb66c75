from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from .fetcher import DataFetcher
from .models import ErrorKind, FetchResult
from .render.display import Display
from .render.renderer import Renderer

LOGGER = logging.getLogger(__name__)


class LookupController:
    """Wires the trigger to one fetch and one render per cycle.

    Overlapping cycles are allowed and apply in the order they settle, so a
    slow early lookup can overwrite a faster later one. Pass
    ``discard_stale=True`` to drop any cycle older than the newest one
    already applied.
    """

    def __init__(
        self,
        fetcher: DataFetcher,
        renderer: Renderer,
        display: Display,
        max_workers: int = 4,
        discard_stale: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.renderer = renderer
        self.display = display
        self.discard_stale = discard_stale
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lookup")
        self._tokens = itertools.count(1)
        self._applied = 0
        self._guard = threading.Lock()
        self._apply_lock = threading.Lock()

    def _next_token(self) -> int:
        with self._guard:
            return next(self._tokens)

    def _apply(self, result: FetchResult, token: int) -> bool:
        with self._apply_lock:
            if self.discard_stale and token < self._applied:
                return False
            self._applied = max(self._applied, token)
            if result.ok:
                self.renderer.render_results(result.location, result.payload)
            else:
                self.renderer.render_error(result.error.message)
            return True

    def _run(self, value: Optional[str], token: int) -> FetchResult:
        try:
            result = self.fetcher.fetch(value)
        except Exception as exc:
            LOGGER.exception("Lookup for %r failed unexpectedly", value)
            result = FetchResult.failure(value, ErrorKind.NETWORK_ERROR, str(exc))

        if not self._apply(result, token):
            LOGGER.info("Discarding stale lookup #%s for %r", token, value)
        return result

    def trigger(self, value: Optional[str] = None) -> FetchResult:
        if value is None:
            value = self.display.input_value
        return self._run(value, self._next_token())

    def submit(self, value: Optional[str] = None) -> Future:
        if value is None:
            value = self.display.input_value
        return self._executor.submit(self._run, value, self._next_token())

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "LookupController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
