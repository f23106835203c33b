"""
Service construction from the active Flask application.

Services take their collaborators through the constructor; these factories
read ``current_app.config`` once per call and hand the concrete adapters in.
Stateless adapters are cached in ``app.extensions``.
"""

from __future__ import annotations

from flask import current_app

from pawpong.core.extensions import get_redis
from pawpong.infra.jwt.token_issuer import JWTTokenIssuer
from pawpong.infra.oauth.registry import ProviderRegistry
from pawpong.infra.redis.redis_oauth_state_store import RedisOAuthStateStore
from pawpong.infra.security.refresh_token_guard import WerkzeugRefreshTokenGuard
from pawpong.services._shared.ports import InMemoryOAuthStateStore, OAuthStateStore
from pawpong.services.auth.service import AuthService
from pawpong.services.registration.service import RegistrationService
from pawpong.services.social.service import SocialAuthService
from pawpong.services.verification.service import BreederVerificationService

_EXT_KEY = "pawpong.wiring"


def _cache() -> dict:
    return current_app.extensions.setdefault(_EXT_KEY, {})


def build_token_issuer() -> JWTTokenIssuer:
    cache = _cache()
    if "token_issuer" not in cache:
        cache["token_issuer"] = JWTTokenIssuer.from_app(current_app)
    return cache["token_issuer"]


def build_refresh_guard() -> WerkzeugRefreshTokenGuard:
    cache = _cache()
    if "refresh_guard" not in cache:
        cache["refresh_guard"] = WerkzeugRefreshTokenGuard(
            method=current_app.config.get("REFRESH_TOKEN_HASH_METHOD", "scrypt")
        )
    return cache["refresh_guard"]


def build_oauth_state_store() -> OAuthStateStore:
    """
    Return the OAuth ``state`` store.

    Redis when ``REDIS_URL`` is configured, otherwise a process-local store
    (fine for tests and a single development worker).
    """
    cache = _cache()
    if "oauth_state_store" not in cache:
        client = get_redis()
        cache["oauth_state_store"] = (
            RedisOAuthStateStore(client) if client is not None else InMemoryOAuthStateStore()
        )
    return cache["oauth_state_store"]


def build_provider_registry() -> ProviderRegistry:
    cache = _cache()
    if "provider_registry" not in cache:
        cache["provider_registry"] = ProviderRegistry(current_app.config)
    return cache["provider_registry"]


def build_auth_service() -> AuthService:
    return AuthService(
        token_issuer=build_token_issuer(),
        refresh_hasher=build_refresh_guard(),
    )


def build_social_auth_service() -> SocialAuthService:
    return SocialAuthService(
        sessions=build_auth_service(),
        token_issuer=build_token_issuer(),
    )


def build_registration_service() -> RegistrationService:
    return RegistrationService(sessions=build_auth_service())


def build_verification_service() -> BreederVerificationService:
    return BreederVerificationService()
