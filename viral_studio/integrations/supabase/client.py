"""
Supabase client factory.

This module creates the shared Supabase client and reads provider API
keys stored in the ``api_keys`` table.
"""

import logging
from typing import Optional

from supabase import create_client, Client

from ...core.models.errors import ConfigurationError


logger = logging.getLogger(__name__)

API_KEYS_TABLE = "api_keys"


def get_supabase_client(url: Optional[str], key: Optional[str]) -> Client:
    """
    Create a Supabase client.

    Args:
        url: Project URL
        key: Service or anon key

    Returns:
        Supabase client instance

    Raises:
        ConfigurationError: If credentials are missing
    """
    if not url or not key:
        raise ConfigurationError(
            "Supabase credentials not found (SUPABASE_URL and SUPABASE_KEY required)",
            config_key="SUPABASE_URL"
        )

    client = create_client(url, key)
    logger.info("Supabase client initialized successfully")
    return client


def get_api_key(client: Client, provider: str) -> Optional[str]:
    """
    Fetch a provider API key from the api_keys table.

    Returns:
        API key value or None if not found or the lookup failed
    """
    try:
        response = client.table(API_KEYS_TABLE).select('key_value').eq('provider', provider).execute()
    except Exception as e:
        logger.error(f"Error fetching {provider} API key from Supabase: {str(e)}")
        return None

    if response.data:
        api_key = response.data[0].get('key_value')
        if api_key:
            logger.info(f"Fetched {provider} API key from Supabase")
            return api_key
        logger.warning(f"{provider} API key found in Supabase but key_value is empty")
    else:
        logger.warning(f"{provider} API key not found in Supabase {API_KEYS_TABLE} table")
    return None
