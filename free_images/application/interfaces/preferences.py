from __future__ import annotations

from typing import Any, Protocol


class IPreferenceStore(Protocol):
    """Per-user preference storage supplied by the host."""

    def get(self, name: str, default: Any = None) -> Any:
        ...

    def set(self, name: str, value: Any) -> None:
        ...
