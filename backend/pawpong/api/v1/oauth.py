"""OAuth redirect and callback endpoints for Google, Naver and Kakao."""

from __future__ import annotations

import logging
import secrets
from typing import Any
from urllib.parse import urlencode

from flask import Blueprint, current_app, redirect, request

from pawpong.api.deps import timing, translate_service_errors
from pawpong.core.errors import BadRequest, NotFound
from pawpong.infra.oauth.base import OAuthProvider
from pawpong.services.wiring import (
    build_auth_service,
    build_oauth_state_store,
    build_provider_registry,
    build_social_auth_service,
)

log = logging.getLogger(__name__)

bp = Blueprint("oauth", __name__)

PROVIDER_RULE = "<any(google, naver, kakao):provider>"


def _bridge(provider: str) -> OAuthProvider:
    try:
        return build_provider_registry().get(provider)
    except ValueError as exc:
        raise NotFound(f"OAuth provider '{provider}' is not configured") from exc


def _frontend_url(path: str, params: dict[str, Any]) -> str:
    base = str(current_app.config.get("FRONTEND_URL", "")).rstrip("/")
    return f"{base}{path}?{urlencode(params)}"


@bp.get(f"/{PROVIDER_RULE}")
@timing
def authorize(provider: str):
    """Start the authorization-code flow by redirecting to the provider."""

    bridge = _bridge(provider)
    state = secrets.token_urlsafe(32)
    ttl = int(current_app.config.get("OAUTH_STATE_TTL", 600))
    build_oauth_state_store().save(state, {"provider": provider}, ttl_seconds=ttl)
    return redirect(bridge.build_authorization_url(state=state))


@bp.get(f"/{PROVIDER_RULE}/callback")
@timing
@translate_service_errors
def callback(provider: str):
    """
    Finish the flow and hand the browser back to the frontend.

    Known identities land on ``/login/success`` with a token pair; new ones
    land on ``/signup`` with the pending identity to complete.
    """

    bridge = _bridge(provider)
    if request.args.get("error"):
        raise BadRequest(f"OAuth authorization denied: {request.args['error']}")

    state = request.args.get("state", "")
    code = request.args.get("code", "")
    saved = build_oauth_state_store().consume(state) if state else None
    if not saved:
        raise BadRequest("Invalid or expired OAuth state")
    if saved.get("provider") != provider:
        raise BadRequest("OAuth state provider mismatch")
    if not code:
        raise BadRequest("Missing authorization code")

    profile = bridge.authenticate(code=code, state=state)
    result = build_social_auth_service().handle_social_login(profile)

    if result.user is not None:
        session = build_auth_service().generate_social_login_tokens(
            result.user.user_id, result.user.role
        )
        return redirect(
            _frontend_url(
                "/login/success",
                {
                    "accessToken": session.tokens.access_token,
                    "refreshToken": session.tokens.refresh_token,
                },
            )
        )

    params: dict[str, Any] = {
        "tempId": result.temp_user_id,
        "provider": provider,
        "email": profile.email or "",
        "name": profile.name or "",
        "profileImage": profile.profile_image or "",
        "registrationToken": result.registration_token,
    }
    if profile.needs_email:
        params["needsEmail"] = "true"
    log.info("Redirecting new social user to signup", extra={"provider": provider})
    return redirect(_frontend_url("/signup", params))
