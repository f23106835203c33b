"""OAuth provider registry built from application config."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import requests

from .base import OAuthProvider
from .google import GoogleOAuthProvider
from .kakao import KakaoOAuthProvider
from .naver import NaverOAuthProvider

_PROVIDERS: dict[str, type[OAuthProvider]] = {
    "google": GoogleOAuthProvider,
    "naver": NaverOAuthProvider,
    "kakao": KakaoOAuthProvider,
}


class ProviderRegistry:
    """
    Resolve configured OAuth bridges by name.

    A provider is registered only when its ``<NAME>_CLIENT_ID`` is set.

    :param config: Mapping with ``GOOGLE_CLIENT_ID``/``..._CLIENT_SECRET``/
        ``..._CALLBACK_URL`` style keys (``app.config`` works).
    :param session: Optional shared ``requests.Session``.
    """

    def __init__(
        self, config: Mapping[str, Any], *, session: requests.Session | None = None
    ) -> None:
        timeout = float(config.get("OAUTH_HTTP_TIMEOUT", 10.0))
        self._providers: dict[str, OAuthProvider] = {}
        for name, cls in _PROVIDERS.items():
            prefix = name.upper()
            client_id = config.get(f"{prefix}_CLIENT_ID")
            if not client_id:
                continue
            self._providers[name] = cls(
                client_id=client_id,
                client_secret=config.get(f"{prefix}_CLIENT_SECRET", ""),
                redirect_uri=config.get(f"{prefix}_CALLBACK_URL", ""),
                timeout=timeout,
                session=session,
            )

    def get(self, provider: str) -> OAuthProvider:
        """
        Return the bridge for ``provider``.

        :raises ValueError: If the provider is unknown or not configured.
        """
        key = (provider or "").lower()
        if key not in self._providers:
            available = ", ".join(sorted(self._providers)) or "none"
            raise ValueError(f"Unsupported provider: {provider}. Available: {available}")
        return self._providers[key]

    def names(self) -> list[str]:
        return sorted(self._providers)
