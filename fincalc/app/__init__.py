"""Application factory and app-wide configuration."""

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from fincalc.app.api.routes import LIMITS_KEY, api_bp
from fincalc.config import limits_from_config

DEFAULT_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance.

    Configuration comes from ``FINCALC_*`` environment variables (e.g.
    ``FINCALC_PAYOFF_MAX_PERIODS=600``), then ``overrides``. Loop caps are
    validated once here so a bad value fails at startup, not per request.
    """
    app = Flask(__name__)
    app.config.update(CORS_ORIGINS=DEFAULT_ORIGINS, LOG_LEVEL="INFO")
    app.config.from_prefixed_env("FINCALC")
    if overrides:
        app.config.update(overrides)

    logging.getLogger("fincalc").setLevel(app.config["LOG_LEVEL"])
    app.extensions[LIMITS_KEY] = limits_from_config(app.config)

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
