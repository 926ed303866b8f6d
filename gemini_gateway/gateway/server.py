"""
API gateway: wires settings, the Gemini client and the AI blueprint together.
This is the process entrypoint (`gemini-gateway`).
"""

import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from gemini_gateway.ai_service.client import GenerationService
from gemini_gateway.ai_service.routes import SERVICE_EXTENSION, ai_blueprint
from gemini_gateway.gateway.config import Settings

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"


def create_app(settings: Optional[Settings] = None, generation_service: Optional[GenerationService] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        settings (Settings, optional): Configuration; read from the environment when omitted.
        generation_service (GenerationService, optional): Provider wrapper; built from
            `settings` when omitted. Tests inject a stub here.

    Returns:
        Flask: The configured Flask application.
    """
    if settings is None:
        settings = Settings.from_env()
    if generation_service is None:
        generation_service = GenerationService.from_settings(settings)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes
    app.config["EXPOSE_ERROR_DETAILS"] = settings.expose_error_details
    app.extensions[SERVICE_EXTENSION] = generation_service

    CORS(app, resources={
        r"/*": {
            "origins": list(settings.cors_origins),
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })

    app.register_blueprint(ai_blueprint)

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        """Return JSON instead of Werkzeug's HTML error pages (413 on oversized uploads)."""
        logging.warning(f"[Gateway] {error.code} {error.name}")
        return jsonify({"error": error.description}), error.code

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"}), 200

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    settings = Settings.from_env()
    app = create_app(settings)

    logging.info(f"Server ready on http://localhost:{settings.port}")
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
