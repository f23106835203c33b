from __future__ import annotations

from typing import Any

from .base import OAuthProfile, OAuthProvider, OAuthProviderError


class GoogleOAuthProvider(OAuthProvider):
    name = "google"
    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    profile_url = "https://openidconnect.googleapis.com/v1/userinfo"
    default_scopes = ("openid", "email", "profile")

    def normalize_profile(self, payload: dict[str, Any]) -> OAuthProfile:
        sub = payload.get("sub")
        if not sub:
            raise OAuthProviderError(self.name, "profile has no subject")
        return OAuthProfile(
            provider=self.name,
            provider_id=str(sub),
            email=payload.get("email"),
            name=payload.get("name"),
            profile_image=payload.get("picture"),
        )
