"""
Supabase-backed configuration and platform format stores.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from supabase import Client

from ...core.models.errors import PersistenceError
from ...core.ports import ConfigurationStore, PlatformFormatStore


logger = logging.getLogger(__name__)


class SupabaseConfigurationStore(ConfigurationStore):
    """Reads the row flagged ``is_active`` from the model configuration table."""

    def __init__(self, client: Client, table: str = "model_configurations"):
        self.client = client
        self.table = table

    async def fetch_active_model_row(self) -> Optional[Dict[str, Any]]:
        try:
            response = await asyncio.to_thread(
                lambda: self.client.table(self.table)
                .select('*')
                .eq('is_active', True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to read active model configuration: {str(e)}")
            raise PersistenceError(
                f"Failed to read active model configuration: {str(e)}",
                table=self.table,
                operation="read"
            )

        if not response.data:
            return None
        return response.data[0]


class SupabasePlatformFormatStore(PlatformFormatStore):
    """Reads per-platform templates from the platform format table."""

    def __init__(self, client: Client, table: str = "platform_formats"):
        self.client = client
        self.table = table

    async def get_template(self, platform_id: str) -> Optional[str]:
        try:
            response = await asyncio.to_thread(
                lambda: self.client.table(self.table)
                .select('template_text')
                .eq('platform_id', platform_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            # Formats degrade to the builtin template
            logger.warning(f"Failed to read platform format for {platform_id}: {str(e)}")
            return None

        if not response.data:
            return None
        return response.data[0].get('template_text')
