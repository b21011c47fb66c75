from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


DEFAULT_TIMEOUT = 30


class TimeoutHTTPAdapter(HTTPAdapter):
    def __init__(self, *args, timeout: float = DEFAULT_TIMEOUT, **kwargs) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):  # type: ignore[override]
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(user_agent: str, timeout: float = DEFAULT_TIMEOUT) -> requests.Session:
    """Session for single-shot lookups: one attempt per request, no status retries."""
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    retry = Retry(total=0, read=False, raise_on_status=False)
    adapter = TimeoutHTTPAdapter(timeout=timeout, max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session
