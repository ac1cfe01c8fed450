from __future__ import annotations

import logging
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from app.blueprints.api.plant_qa import plant_qa_api
from app.blueprints.api.plants import plants_api
from app.config import load_config, setup_logging
from app.utils.http import error_response


def create_app(config_overrides: dict[str, Any] | None = None, *, bootstrap_runtime: bool = False) -> Flask:
    config = load_config()
    if config_overrides:
        for key, value in config_overrides.items():
            setattr(config, key if key == "DEBUG" else key.lower(), value)
        config.__post_init__()

    setup_logging(debug=config.DEBUG, log_file=config.log_file or None)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())

    from app.services.container import ServiceContainer

    # Catalog fetch only happens when bootstrapping a real server
    container = ServiceContainer.build(config, initialize_store=bootstrap_runtime)
    flask_app.config["CONTAINER"] = container

    flask_app.register_blueprint(plant_qa_api, url_prefix="/api/plant-qa")
    flask_app.register_blueprint(plants_api, url_prefix="/api/plants")

    @flask_app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        if request.path.startswith("/api/"):
            return error_response(exc.description or exc.name, exc.code or 500)
        return exc

    logging.info(
        "Vatika app created (env=%s, secondary_provider=%s)",
        config.environment,
        config.secondary_provider,
    )
    return flask_app
