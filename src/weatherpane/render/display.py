from __future__ import annotations

from typing import Optional, Protocol

from ..models import ResultsView


class Display(Protocol):
    """The four page regions the lookup cycle writes to."""

    input_value: Optional[str]

    def show_results(self, view: ResultsView) -> None:  # pragma: no cover - structural contract
        ...

    def show_error(self, message: str) -> None:  # pragma: no cover - structural contract
        ...

    def clear(self) -> None:  # pragma: no cover - structural contract
        ...

    def clear_input(self) -> None:  # pragma: no cover - structural contract
        ...
