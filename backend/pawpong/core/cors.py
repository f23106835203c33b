"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for API endpoints based on application config.

    The web client calls the API with credentials, so an explicit origin list
    enables ``supports_credentials``. A blank or ``"*"`` ``CORS_ORIGINS``
    allows any origin without credentials. ``FRONTEND_URL`` is always allowed
    when origins are listed.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    frontend = (app.config.get("FRONTEND_URL") or "").rstrip("/")
    if not wildcard and frontend and frontend not in origins:
        origins.append(frontend)

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
