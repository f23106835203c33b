"""Shared plumbing for the OAuth provider bridges.

Each bridge turns an authorization ``code`` into a normalized
:class:`OAuthProfile`. Network calls go through ``requests`` with an explicit
timeout. Provider-side failures surface as :class:`OAuthProviderError`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import requests

log = logging.getLogger(__name__)


class OAuthProviderError(Exception):
    """A provider rejected a request or returned an unusable payload."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


@dataclass(frozen=True, slots=True)
class OAuthProfile:
    """
    Provider-neutral profile handed to the social login flow.

    :param provider: ``"google"``, ``"naver"`` or ``"kakao"``.
    :param provider_id: Stable provider-side user id (always a string).
    :param email: Email reported by the provider, or a placeholder when
        ``needs_email`` is set.
    :param name: Display name.
    :param profile_image: Avatar URL, if any.
    :param needs_email: The provider gave no real email; the client must ask.
    """

    provider: str
    provider_id: str
    email: str | None
    name: str | None
    profile_image: str | None = None
    needs_email: bool = False


class OAuthProvider(ABC):
    """
    Authorization-code flow against one provider.

    Subclasses set the endpoint URLs and implement :meth:`normalize_profile`.

    :param client_id: OAuth client id.
    :param client_secret: OAuth client secret.
    :param redirect_uri: Callback URL registered with the provider.
    :param timeout: Per-request timeout in seconds.
    :param session: Optional ``requests.Session`` (connection reuse, tests).
    """

    name: str
    authorize_url: str
    token_url: str
    profile_url: str
    default_scopes: tuple[str, ...] = ()
    #: Naver expects the original ``state`` again on the token request
    send_state_on_exchange: bool = False

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.http = session or requests.Session()

    def build_authorization_url(self, *, state: str) -> str:
        """Return the provider consent URL carrying ``state``."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "state": state,
        }
        if self.default_scopes:
            params["scope"] = " ".join(self.default_scopes)
        return f"{self.authorize_url}?{urlencode(params)}"

    def exchange_code(self, *, code: str, state: str | None = None) -> dict[str, Any]:
        """
        Trade the authorization code for provider tokens.

        :raises OAuthProviderError: On transport errors, non-2xx replies or a
            reply without ``access_token``.
        """
        data = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "code": code,
        }
        if state and self.send_state_on_exchange:
            data["state"] = state
        payload = self._request("POST", self.token_url, data=data)
        if not payload.get("access_token"):
            raise OAuthProviderError(self.name, "token response has no access_token")
        return payload

    def fetch_profile(self, tokens: dict[str, Any]) -> OAuthProfile:
        """Fetch the user profile with the provider access token and normalize it."""
        headers = {"Authorization": f"Bearer {tokens['access_token']}"}
        payload = self._request("GET", self.profile_url, headers=headers)
        return self.normalize_profile(payload)

    def authenticate(self, *, code: str, state: str | None = None) -> OAuthProfile:
        """Run :meth:`exchange_code` then :meth:`fetch_profile`."""
        return self.fetch_profile(self.exchange_code(code=code, state=state))

    @abstractmethod
    def normalize_profile(self, payload: dict[str, Any]) -> OAuthProfile:
        """Map the provider's profile JSON to :class:`OAuthProfile`."""

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self.http.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            log.warning("oauth.request_failed", extra={"provider": self.name})
            raise OAuthProviderError(self.name, f"{method} {url} failed") from exc
        except ValueError as exc:
            raise OAuthProviderError(self.name, "response is not JSON") from exc
