"""
Authentication middleware for Viral Studio.

Resolves the Supabase bearer token on every protected request and
stores the authenticated identity in ``g.identity_id``.
"""

import logging
from functools import wraps
from flask import request, g

from ...core.models.errors import AuthenticationError
from ..extensions import get_services


logger = logging.getLogger(__name__)

PUBLIC_ENDPOINTS = frozenset([
    'health.health_check',
    'health.detailed_health_check',
    'root',
    'static'
])


class AuthMiddleware:
    """Bearer token authentication."""

    @staticmethod
    def before_request():
        """Authenticate the request before handling."""
        if request.method == 'OPTIONS':
            return None

        # Unknown routes fall through to the 404 handler
        if request.endpoint is None or request.endpoint in PUBLIC_ENDPOINTS:
            return None

        token = AuthMiddleware.extract_token(request.headers.get('Authorization', ''))
        if not token:
            raise AuthenticationError("Bearer token is required")

        identity_provider = get_services().identity_provider
        g.identity_id = identity_provider.get_current_identity(token)
        return None

    @staticmethod
    def extract_token(header: str) -> str:
        """
        Extract the token from an Authorization header.

        Args:
            header: Raw header value

        Returns:
            Token, or an empty string when the header is not a bearer header
        """
        scheme, _, token = header.partition(' ')
        if scheme.lower() != 'bearer':
            return ''
        return token.strip()


def require_identity(f):
    """Reject the request unless the middleware authenticated it."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not getattr(g, 'identity_id', None):
            raise AuthenticationError("Authentication required")
        return f(*args, **kwargs)

    return decorated_function
