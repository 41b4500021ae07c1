"""Fitness service application entrypoint."""
from __future__ import annotations

import logging

from flask import Flask
from werkzeug.exceptions import HTTPException

from src.config import get_config
from src.database import init_engine
from src.routes import register_blueprints
from src.routes.dependencies import cleanup_services
from src.routes.utils import error_response, internal_error_response

app = Flask(__name__)


def create_app() -> Flask:
    configure_logging()
    init_engine()
    register_blueprints(app)
    app.teardown_appcontext(cleanup_services)
    register_error_handlers(app)
    return app


def configure_logging() -> None:
    level = getattr(logging, get_config().log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@app.get("/health")
def health():
    return {"status": "ok", "service": "fitness-service"}


def register_error_handlers(flask_app: Flask) -> None:
    @flask_app.errorhandler(404)
    def handle_404(e):
        return error_response(404, "Resource not found.")

    @flask_app.errorhandler(405)
    def handle_405(e):
        return error_response(405, "Method not allowed for this resource.")

    @flask_app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return error_response(e.code or 500, e.description or e.name)
        return internal_error_response(e)


create_app()


if __name__ == "__main__":
    app.run(debug=True, port=5003)
