from __future__ import annotations

import time
from typing import Any, Protocol


class OAuthStateStore(Protocol):
    """
    Port for the one-time ``state`` parameter of the OAuth redirect hop.

    ``consume`` returns the saved payload once and deletes it, so a replayed
    callback finds nothing.
    """

    def save(self, state: str, data: dict[str, Any], ttl_seconds: int = 600) -> None: ...

    def consume(self, state: str) -> dict[str, Any] | None: ...


class InMemoryOAuthStateStore(OAuthStateStore):
    """Process-local store for tests and Redis-less development.

    Not shared between gunicorn workers.
    """

    def __init__(self) -> None:
        self._items: dict[str, tuple[float, dict[str, Any]]] = {}

    def save(self, state: str, data: dict[str, Any], ttl_seconds: int = 600) -> None:
        self._items[state] = (time.monotonic() + ttl_seconds, dict(data))

    def consume(self, state: str) -> dict[str, Any] | None:
        item = self._items.pop(state, None)
        if item is None:
            return None
        deadline, data = item
        if time.monotonic() >= deadline:
            return None
        return data
