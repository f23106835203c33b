from __future__ import annotations

from typing import Any

from .base import OAuthProfile, OAuthProvider, OAuthProviderError

PLACEHOLDER_EMAIL_DOMAIN = "temp.pawpong.com"


class KakaoOAuthProvider(OAuthProvider):
    """
    Kakao Login.

    Kakao only shares an email when the user consents to it. Without one the
    profile gets a ``kakao_{id}@temp.pawpong.com`` placeholder and
    ``needs_email=True`` so the signup page asks for a real address.
    """

    name = "kakao"
    authorize_url = "https://kauth.kakao.com/oauth/authorize"
    token_url = "https://kauth.kakao.com/oauth/token"
    profile_url = "https://kapi.kakao.com/v2/user/me"
    default_scopes = ("profile_nickname", "profile_image", "account_email")

    def normalize_profile(self, payload: dict[str, Any]) -> OAuthProfile:
        kakao_id = payload.get("id")
        if kakao_id is None:
            raise OAuthProviderError(self.name, "profile has no id")
        account = payload.get("kakao_account") or {}
        profile = account.get("profile") or {}
        properties = payload.get("properties") or {}

        email = account.get("email")
        needs_email = not email
        if needs_email:
            email = f"kakao_{kakao_id}@{PLACEHOLDER_EMAIL_DOMAIN}"

        name = profile.get("nickname") or properties.get("nickname") or f"카카오사용자{kakao_id}"
        image = profile.get("profile_image_url") or properties.get("profile_image")
        return OAuthProfile(
            provider=self.name,
            provider_id=str(kakao_id),
            email=email,
            name=name,
            profile_image=image,
            needs_email=needs_email,
        )
