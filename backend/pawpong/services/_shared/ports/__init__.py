"""
pawpong.services._shared.ports
==============================

*Ports* (hexagonal interfaces) the service layer depends on for token
issuance, refresh-token hashing and OAuth state.

Modules
-------
- :mod:`token_issuer`:
    :class:`~.TokenIssuer`, :class:`~.TokenPair` and :class:`~.TokenDecodeError`.
- :mod:`refresh_token_hasher`:
    :class:`~.RefreshTokenHasher`, the one-way hash guarding stored refresh tokens.
- :mod:`oauth_state_store`:
    :class:`~.OAuthStateStore` plus the in-memory double.

Concrete adapters live under ``pawpong.infra``.
"""

from __future__ import annotations

from .oauth_state_store import InMemoryOAuthStateStore, OAuthStateStore
from .refresh_token_hasher import RefreshTokenHasher
from .token_issuer import (
    REFRESH_TOKEN_TYPE,
    SOCIAL_REGISTRATION_TOKEN_TYPE,
    TokenDecodeError,
    TokenErrorKind,
    TokenIssuer,
    TokenPair,
)

__all__ = [
    "REFRESH_TOKEN_TYPE",
    "SOCIAL_REGISTRATION_TOKEN_TYPE",
    "InMemoryOAuthStateStore",
    "OAuthStateStore",
    "RefreshTokenHasher",
    "TokenDecodeError",
    "TokenErrorKind",
    "TokenIssuer",
    "TokenPair",
]
