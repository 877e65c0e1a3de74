"""
Main Flask application for Viral Studio.

This module creates and configures the Flask application
with all necessary middleware, blueprints, and error handlers.
"""

import logging
from datetime import datetime
from typing import Optional
from flask import Flask, jsonify
from flask_cors import CORS

from .endpoints import generation_bp, refinement_bp, health_bp
from .extensions import CONFIG_KEY, SERVICES_KEY, limiter
from .middleware.auth import AuthMiddleware
from .middleware.logging import LoggingMiddleware
from .middleware.error_handler import ErrorHandler
from ..utils.config import get_config
from ..utils.logging import setup_logging
from ..utils.services import ServiceContainer


def create_app(config_name: str = None, services: Optional[ServiceContainer] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config_name: Configuration name (development, production, testing)
        services: Collaborators to use; built from Supabase and LiteLLM on
            first use when omitted

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    config = services.config if services is not None else get_config(config_name)
    app.config.from_object(config)
    app.config.setdefault('RATELIMIT_STORAGE_URI', config.RATELIMIT_STORAGE_URL)

    app.extensions[CONFIG_KEY] = config
    if services is not None:
        app.extensions[SERVICES_KEY] = services

    setup_logging(app.config)

    CORS(app, origins=app.config.get('CORS_ORIGINS', ['*']))
    limiter.init_app(app)

    # Logging runs first so every later failure carries a request id
    app.before_request(LoggingMiddleware.before_request)
    app.before_request(AuthMiddleware.before_request)
    app.after_request(LoggingMiddleware.after_request)

    app.register_blueprint(generation_bp)
    app.register_blueprint(refinement_bp)
    app.register_blueprint(health_bp)

    ErrorHandler.register_handlers(app)

    @app.route('/')
    def root():
        return jsonify({
            "service": "viral-studio",
            "version": app.config.get('API_VERSION'),
            "status": "running",
            "timestamp": datetime.utcnow().isoformat(),
            "endpoints": {
                "health": "/api/v1/health",
                "generate": "/api/v1/generate",
                "generation_jobs": "/api/v1/generate/jobs",
                "refine": "/api/v1/refine"
            }
        })

    logger = logging.getLogger(__name__)
    logger.info(f"Flask application created with config: {config.__class__.__name__}")

    return app


def run_app(host: str = '0.0.0.0', port: int = 5001, debug: bool = False):
    """
    Run the Flask application.

    Args:
        host: Host to bind to
        port: Port to bind to
        debug: Enable debug mode
    """
    app = create_app()

    logger = logging.getLogger(__name__)
    logger.info(f"Starting Viral Studio on {host}:{port}")

    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    run_app()
