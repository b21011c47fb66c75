from __future__ import annotations

import logging
from typing import Optional

import requests

from .endpoints import PARSE_ERROR_MESSAGE, EndpointShape
from .models import ErrorKind, FetchResult
from .util.http import DEFAULT_TIMEOUT

LOGGER = logging.getLogger(__name__)


class DataFetcher:
    """Issues one GET per lookup and classifies the outcome.

    Nothing is stored between calls, so a single fetcher can serve
    overlapping lookups from several threads. ``requests.Session`` is shared
    across them the same way the ingest clients share theirs.
    """

    def __init__(self, session, shape: EndpointShape, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.session = session
        self.shape = shape
        self.timeout = timeout

    def fetch(self, raw: Optional[str]) -> FetchResult:
        code = self.shape.normalize_code(raw)
        if code is None:
            return FetchResult.failure(raw, ErrorKind.INVALID_INPUT, self.shape.invalid_input_message)

        url = self.shape.build_url(code)
        LOGGER.debug("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.warning("%s lookup for %s failed: %s", self.shape.name, code, exc)
            return FetchResult.failure(code, ErrorKind.NETWORK_ERROR, str(exc))
        except Exception as exc:
            LOGGER.exception("%s lookup for %s failed in transport", self.shape.name, code)
            return FetchResult.failure(code, ErrorKind.NETWORK_ERROR, str(exc))

        if not 200 <= resp.status_code < 300:
            kind, message = self.shape.classify_status(resp.status_code)
            LOGGER.warning("%s lookup for %s returned HTTP %s", self.shape.name, code, resp.status_code)
            return FetchResult.failure(code, kind, message, status=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as exc:
            LOGGER.warning("%s lookup for %s returned unreadable body: %s", self.shape.name, code, exc)
            return FetchResult.failure(code, ErrorKind.PARSE_ERROR, PARSE_ERROR_MESSAGE, status=resp.status_code)

        LOGGER.info("%s lookup for %s succeeded", self.shape.name, code)
        return FetchResult.success(code, payload)
