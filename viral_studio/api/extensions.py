"""
Flask extensions and per-app service lookup.
"""

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from ..utils.services import ServiceContainer, build_services


SERVICES_KEY = 'viral_studio.services'
CONFIG_KEY = 'viral_studio.config'

limiter = Limiter(key_func=get_remote_address)


def get_services() -> ServiceContainer:
    """Return the app's ServiceContainer, building the default one on first use."""
    services = current_app.extensions.get(SERVICES_KEY)
    if services is None:
        services = build_services(current_app.extensions[CONFIG_KEY])
        current_app.extensions[SERVICES_KEY] = services
    return services


def generation_limit() -> str:
    """Per-client limit for endpoints that invoke the provider."""
    return current_app.config.get('RATELIMIT_GENERATE', '30 per minute')
