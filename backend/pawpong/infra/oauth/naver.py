from __future__ import annotations

from typing import Any

from .base import OAuthProfile, OAuthProvider, OAuthProviderError


class NaverOAuthProvider(OAuthProvider):
    """Naver Login. The profile is wrapped in ``{"resultcode", "response"}``."""

    name = "naver"
    authorize_url = "https://nid.naver.com/oauth2.0/authorize"
    token_url = "https://nid.naver.com/oauth2.0/token"
    profile_url = "https://openapi.naver.com/v1/nid/me"
    send_state_on_exchange = True

    def normalize_profile(self, payload: dict[str, Any]) -> OAuthProfile:
        data = payload.get("response") or {}
        naver_id = data.get("id")
        if not naver_id:
            raise OAuthProviderError(self.name, "profile has no id")
        email = data.get("email")
        # Falls back to the email local part when no nickname is shared
        name = data.get("nickname") or data.get("name") or (email.split("@")[0] if email else None)
        return OAuthProfile(
            provider=self.name,
            provider_id=str(naver_id),
            email=email,
            name=name,
            profile_image=data.get("profile_image"),
        )
