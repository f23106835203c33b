"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from marshmallow import Schema

from pawpong.core.errors import Forbidden, Unauthorized
from pawpong.services._shared.base import BaseService
from pawpong.services._shared.errors import ServiceError
from pawpong.services._shared.ports import TokenDecodeError, TokenErrorKind
from pawpong.services.wiring import build_token_issuer

F = TypeVar("F", bound=Callable[..., Any])


def load_json(schema: Schema) -> dict[str, Any]:
    """Validate the JSON body with ``schema``; raises ``ValidationError`` on failure."""

    return schema.load(request.get_json(silent=True) or {})


def verify_access_token() -> dict[str, Any]:
    """
    Verify the ``Authorization: Bearer`` access token and stash its claims.

    Refresh and registration tokens share the signing secret; they carry a
    ``type`` claim and are rejected here.

    :returns: Verified claims, also stored on ``g.jwt_claims``.
    :raises Unauthorized: Missing header, bad scheme, failed verification or
        a non-access token.
    """

    header = request.headers.get("Authorization", "")
    if not header:
        raise Unauthorized("Missing authorization header")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Invalid authorization format")

    try:
        claims = build_token_issuer().decode(token.strip())
    except TokenDecodeError as exc:
        message = "Token has expired" if exc.kind is TokenErrorKind.EXPIRED else "Invalid token"
        raise Unauthorized(message) from exc
    if claims.get("type") is not None:
        raise Unauthorized("Token type mismatch")

    g.jwt_claims = claims
    return claims


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_access_token()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(required: str) -> Callable[[F], F]:
    """Ensure the verified access token carries ``role == required``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            claims = verify_access_token()
            if claims.get("role") != required:
                raise Forbidden(f"Only {required} accounts may call this endpoint")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_claims() -> dict[str, Any]:
    """Return the claims verified for this request, or ``{}``."""

    return getattr(g, "jwt_claims", None) or {}


def current_identity() -> tuple[str, str]:
    """Return ``(sub, role)`` of the verified access token."""

    claims = current_claims()
    return str(claims.get("sub")), str(claims.get("role"))


def translate_service_errors(func: F) -> F:
    """Re-raise service-layer errors as their HTTP counterparts."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except ServiceError as exc:
            raise BaseService.translate_exceptions(exc) from exc

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def success_response(data: Any, message: str, *, status: int = 200) -> Response:
    """Wrap ``data`` in the ``{"success", "data", "message"}`` envelope."""

    return json_response({"success": True, "data": data, "message": message}, status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
