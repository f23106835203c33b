"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text

from pawpong.api.deps import json_response, timing
from pawpong.core.extensions import db, get_redis
from pawpong.services.wiring import build_provider_registry

bp = Blueprint("health", __name__)


def _redis_status() -> str:
    client = get_redis()
    if client is None:
        return "disabled"
    try:
        client.ping()
    except RedisError:
        current_app.logger.exception("healthcheck.redis_error")
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Return application and database health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except Exception:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    version = current_app.config.get("APP_VERSION", "dev")
    commit = current_app.config.get("APP_COMMIT", "unknown")
    oauth = build_provider_registry().names()
    payload = {
        "status": "ok",
        "db": db_status,
        "redis": _redis_status(),
        "oauth_providers": oauth,
        "version": version,
        "commit": commit,
    }
    return json_response(payload)
