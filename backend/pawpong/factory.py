"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from pawpong.core.config import BaseConfig, get_config
from pawpong.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config class, object or import string. ``None`` selects
        one from ``APP_ENV``.
    :param instance_relative_config: Load overrides from the instance folder.
    :param instance_config_filename: Instance file holding local overrides.
    :raises RuntimeError: If ``JWT_SECRET_KEY`` is empty or Redis is
        configured but unreachable.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Proxy headers if running behind a reverse proxy
    from pawpong.core import proxy

    proxy.init_app(app)

    from pawpong.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from pawpong.core import cors

    cors.init_app(app)

    from pawpong.api import init_app as init_api

    init_api(app)

    from pawpong.core import errors

    errors.init_app(app)

    return app
