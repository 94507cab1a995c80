"""Application factory and app-wide configuration."""

import logging

from flask import Flask
from flask_cors import CORS

from investsim.app.api.routes import api_bp
from investsim.config import get_settings

logger = logging.getLogger("investsim.api")


def create_app() -> Flask:
    """Build the Flask app instance."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origin_list}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info("%s ready", settings.app_name)
    return app
