"""
Supabase prompt repository.

Stores one row per generated platform in the ``prompts`` table. All
calls go through ``asyncio.to_thread`` because the Supabase client is
synchronous.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from supabase import Client

from ...core.models.content import ParsedContent, StoredPrompt
from ...core.models.errors import PersistenceError, RecordNotFoundError
from ...core.ports import PromptRepository


logger = logging.getLogger(__name__)


class SupabasePromptRepository(PromptRepository):
    """PromptRepository over a Supabase table."""

    def __init__(self, client: Client, table: str = "prompts"):
        self.client = client
        self.table = table

    async def _execute(self, operation: str, query: Callable[[], Any]):
        try:
            return await asyncio.to_thread(query)
        except Exception as e:
            logger.error(f"Supabase {operation} on {self.table} failed: {str(e)}")
            raise PersistenceError(
                f"Failed to {operation} prompt: {str(e)}",
                table=self.table,
                operation=operation
            )

    async def create_prompt(self, prompt: StoredPrompt) -> StoredPrompt:
        response = await self._execute(
            "insert",
            lambda: self.client.table(self.table).insert(prompt.to_row()).execute()
        )
        if not response.data:
            raise PersistenceError(
                "Insert returned no rows",
                table=self.table,
                operation="insert"
            )
        return StoredPrompt.model_validate(response.data[0])

    async def get_prompt(self, record_id: str, user_id: str) -> Optional[StoredPrompt]:
        response = await self._execute(
            "read",
            lambda: self.client.table(self.table)
            .select('*')
            .eq('id', record_id)
            .eq('user_id', user_id)
            .eq('hidden', False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return StoredPrompt.model_validate(response.data[0])

    async def update_prompt(self, record_id: str, content: ParsedContent) -> StoredPrompt:
        values = {
            "script_result": content.script_body,
            "content_analysis": [item.model_dump() for item in content.analysis_items],
            "viral_score": content.aggregate_score,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        response = await self._execute(
            "update",
            lambda: self.client.table(self.table).update(values).eq('id', record_id).execute()
        )
        if not response.data:
            raise RecordNotFoundError(
                f"Prompt {record_id} not found",
                table=self.table,
                record_id=record_id
            )
        return StoredPrompt.model_validate(response.data[0])

    async def find_existing(self, user_id: str, platform: str, prompt_text: str) -> Optional[StoredPrompt]:
        response = await self._execute(
            "read",
            lambda: self.client.table(self.table)
            .select('*')
            .eq('user_id', user_id)
            .eq('platform', platform)
            .eq('prompt_text', prompt_text)
            .eq('hidden', False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return StoredPrompt.model_validate(response.data[0])
