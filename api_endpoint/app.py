"""
Flask service exposing a request-aware API description.

It exposes:
 - /__api (configurable): the API description, rewritten for the caller's proxy URL
 - /__build-info: build metadata as JSON
 - /__ping: liveness probe

Unroutable requests are answered with an ErrorResponse JSON body.
Environment variables:
 - API_YML: path to the YAML API description (default: the bundled api.yml).
 - API_PATH: path the description is mounted at (default /__api).
 - API_FORWARDED_URL_HEADER: header carrying the client-facing URL (default X-Original-Request-URL).
 - APP_PORT: port for running the service (default 8080).
"""
# Type hints
from typing import Any, Dict, Optional

# Standard library imports
import logging
import os

# Third-party imports
from flask import Flask, Response, jsonify, request
from dotenv import load_dotenv

# Internal imports
from api_endpoint.buildinfo import get_build_info
from api_endpoint.endpoint import DEFAULT_API_PATH, new_api_endpoint_for_file
from api_endpoint.error_renderer import render_error
from api_endpoint.rewrite import DEFAULT_FORWARDED_URL_HEADER

logger = logging.getLogger(__name__)

# Load .env file for local development
load_dotenv()

# Description shipped with the package, documenting this service itself
DEFAULT_API_YML = os.path.join(os.path.dirname(__file__), "api.yml")


def load_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Read service settings from the environment, with explicit overrides winning."""
    config = {
        "API_YML": os.getenv("API_YML", DEFAULT_API_YML),
        "API_PATH": os.getenv("API_PATH", DEFAULT_API_PATH),
        "API_FORWARDED_URL_HEADER": os.getenv("API_FORWARDED_URL_HEADER", DEFAULT_FORWARDED_URL_HEADER),
    }
    config.update(overrides or {})
    return config


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: optional overrides for the settings read by load_config(), plus
            any regular Flask config keys (e.g. TESTING).

    Raises:
        InvalidDocumentError: if the API description cannot be parsed.
        OSError: if the API description file cannot be read.
    """
    settings = load_config(config)
    app = Flask(__name__)
    app.config.update(settings)

    # 1️⃣ The description endpoint; fails here, before serving, on a bad document
    api = new_api_endpoint_for_file(
        settings["API_YML"], header_name=settings["API_FORWARDED_URL_HEADER"]
    )
    api.register(app, settings["API_PATH"])
    app.extensions["api_endpoint"] = api

    # 2️⃣ Service status routes
    @app.route('/__build-info', methods=['GET'])
    def build_info():
        """GET /__build-info: current build metadata."""
        return jsonify(get_build_info().model_dump(by_alias=True))

    @app.route('/__ping', methods=['GET'])
    def ping():
        """GET /__ping: returns pong in plain text."""
        return Response("pong", status=200, mimetype="text/plain")

    # 3️⃣ Error handlers
    @app.errorhandler(404)
    def handle_404(e):
        """Convert any Flask 404 into an ErrorResponse."""
        error = render_error("not_found", {"path": request.path, "status_code": 404})
        return jsonify(error.model_dump()), 404

    @app.errorhandler(405)
    def handle_405(e):
        """Convert any Flask 405 into an ErrorResponse."""
        error = render_error(
            "method_not_allowed",
            {"method": request.method, "path": request.path, "status_code": 405},
        )
        response = jsonify(error.model_dump())
        # Keep the Allow header werkzeug computed for this route
        response.headers["Allow"] = ", ".join(e.valid_methods or [])
        return response, 405

    return app


# Entry point: run Flask app on APP_PORT (default 8080)
if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    port = int(os.environ.get("APP_PORT", 8080))
    create_app().run(port=port)
