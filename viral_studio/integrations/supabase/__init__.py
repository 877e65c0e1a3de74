"""
Supabase integration.
"""

from .auth import SupabaseIdentityProvider
from .client import get_api_key, get_supabase_client
from .config_store import SupabaseConfigurationStore, SupabasePlatformFormatStore
from .prompt_store import SupabasePromptRepository

__all__ = [
    'SupabaseIdentityProvider',
    'get_api_key',
    'get_supabase_client',
    'SupabaseConfigurationStore',
    'SupabasePlatformFormatStore',
    'SupabasePromptRepository'
]
