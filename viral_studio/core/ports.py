"""
Port interfaces for external collaborators.

The pipeline depends only on these abstractions; Supabase and LiteLLM
adapters implement them under ``viral_studio.integrations`` and tests
substitute in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .models.content import ParsedContent, StoredPrompt
from .models.llm import LLMResponse, Message, ModelConfiguration


class ConfigurationStore(ABC):
    """Read-only access to the model configuration collection."""

    @abstractmethod
    async def fetch_active_model_row(self) -> Optional[Dict[str, Any]]:
        """Return the row marked active, or None when there is none."""
        pass


class PlatformFormatStore(ABC):
    """Per-platform format templates keyed by lower-cased platform id."""

    @abstractmethod
    async def get_template(self, platform_id: str) -> Optional[str]:
        """Return the stored template, or None when the platform has no entry."""
        pass


class PromptRepository(ABC):
    """Create/read/update access to stored generation records."""

    @abstractmethod
    async def create_prompt(self, prompt: StoredPrompt) -> StoredPrompt:
        """Insert a record and return it with its assigned id."""
        pass

    @abstractmethod
    async def get_prompt(self, record_id: str, user_id: str) -> Optional[StoredPrompt]:
        """Read one non-hidden record owned by ``user_id``."""
        pass

    @abstractmethod
    async def update_prompt(self, record_id: str, content: ParsedContent) -> StoredPrompt:
        """Replace the parsed fields of an existing record."""
        pass

    @abstractmethod
    async def find_existing(self, user_id: str, platform: str, prompt_text: str) -> Optional[StoredPrompt]:
        """Find a non-hidden record for the same owner, platform and normalized topic."""
        pass


class IdentityProvider(ABC):
    """Resolves the authenticated identity behind a bearer token."""

    @abstractmethod
    def get_current_identity(self, access_token: str) -> str:
        """Return the identity id, raising AuthenticationError when the token is invalid."""
        pass


class CompletionClient(ABC):
    """Text-in/text-out boundary to the generation provider."""

    @abstractmethod
    async def complete(self, messages: List[Message], configuration: ModelConfiguration) -> LLMResponse:
        """Issue one completion request."""
        pass
