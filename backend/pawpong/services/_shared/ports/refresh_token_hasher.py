from __future__ import annotations

from typing import Protocol


class RefreshTokenHasher(Protocol):
    """
    Port for the one-way hash stored in place of raw refresh tokens.

    Hashes are salted, so two calls on the same input differ; compare only
    through :meth:`verify`.
    """

    def hash(self, raw_token: str) -> str: ...

    def verify(self, raw_token: str, hashed_token: str | None) -> bool: ...
