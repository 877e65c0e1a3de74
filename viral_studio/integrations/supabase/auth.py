"""
Supabase identity provider.
"""

import logging

from supabase import Client

from ...core.models.errors import AuthenticationError
from ...core.ports import IdentityProvider


logger = logging.getLogger(__name__)


class SupabaseIdentityProvider(IdentityProvider):
    """Resolves bearer tokens with Supabase Auth."""

    def __init__(self, client: Client):
        self.client = client

    def get_current_identity(self, access_token: str) -> str:
        """
        Return the user id behind an access token.

        Raises:
            AuthenticationError: Token is missing, expired or rejected
        """
        if not access_token:
            raise AuthenticationError("Missing access token")

        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            logger.warning(f"Token verification failed: {str(e)}")
            raise AuthenticationError("Invalid or expired access token")

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            raise AuthenticationError("Invalid or expired access token")
        return str(user.id)
