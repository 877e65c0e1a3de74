"""
Health check endpoints for Viral Studio.

This module provides health check and monitoring endpoints
for the system.
"""

import logging
from datetime import datetime
from flask import Blueprint, jsonify, current_app

from ...utils.health import HealthChecker, overall_status
from ..extensions import CONFIG_KEY, SERVICES_KEY


logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__, url_prefix='/api/v1')


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Basic health check endpoint.

    Returns:
        System health status
    """
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": current_app.config.get('API_VERSION'),
        "service": "viral-studio"
    }), 200


@health_bp.route('/health/detailed', methods=['GET'])
def detailed_health_check():
    """
    Detailed health check endpoint.

    Returns:
        Per-component status; 503 when the database is unreachable
    """
    services = current_app.extensions.get(SERVICES_KEY)
    health_checker = HealthChecker(
        current_app.extensions[CONFIG_KEY],
        supabase_client=services.supabase_client if services else None
    )
    components = health_checker.get_detailed_status()
    status = overall_status(components)

    if status != "healthy":
        logger.warning(f"Health check reports {status}: {components}")

    return jsonify({
        "status": status,
        "timestamp": datetime.utcnow().isoformat(),
        "version": current_app.config.get('API_VERSION'),
        "service": "viral-studio",
        "components": components
    }), 503 if status == "unhealthy" else 200
