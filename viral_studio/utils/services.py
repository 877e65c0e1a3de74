"""
Service wiring for Viral Studio.

Bundles the collaborator ports into one container so the Flask app and
the Celery worker build the pipeline the same way, and tests can inject
in-memory fakes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.pipeline import GenerationPipeline, ModelConfigurationResolver, RefinementCoordinator
from ..core.ports import (
    CompletionClient,
    ConfigurationStore,
    IdentityProvider,
    PlatformFormatStore,
    PromptRepository
)
from ..core.prompts import PlatformFormatResolver
from ..integrations.llm import GenerationInvoker, LiteLLMClient, RetryHandler
from .config import Config, get_config


logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Collaborators shared by every request handled by one process."""

    configuration_store: ConfigurationStore
    platform_format_store: Optional[PlatformFormatStore]
    prompt_repository: PromptRepository
    identity_provider: IdentityProvider
    completion_client: CompletionClient
    config: Config
    supabase_client: Any = None

    def configuration_resolver(self) -> ModelConfigurationResolver:
        return ModelConfigurationResolver(self.configuration_store, provider=self.config.LLM_PROVIDER)

    def format_resolver(self) -> PlatformFormatResolver:
        return PlatformFormatResolver(self.platform_format_store)

    def invoker(self) -> GenerationInvoker:
        retry_handler = RetryHandler(
            max_retries=self.config.LLM_MAX_RETRIES,
            base_delay=self.config.LLM_RETRY_DELAY
        )
        return GenerationInvoker(
            self.completion_client,
            retry_handler=retry_handler,
            max_concurrent=self.config.MAX_PARALLEL_REQUESTS
        )

    def generation_pipeline(self) -> GenerationPipeline:
        return GenerationPipeline(
            self.configuration_resolver(),
            self.format_resolver(),
            self.invoker(),
            self.prompt_repository,
            language=self.config.TARGET_LANGUAGE,
            reuse_existing=self.config.REUSE_EXISTING_PROMPTS
        )

    def refinement_coordinator(self) -> RefinementCoordinator:
        return RefinementCoordinator(
            self.configuration_resolver(),
            self.format_resolver(),
            self.invoker(),
            language=self.config.TARGET_LANGUAGE
        )


def build_services(config: Optional[Config] = None) -> ServiceContainer:
    """
    Build the default container backed by Supabase and LiteLLM.

    The provider API key comes from ``LLM_API_KEY`` or, when unset, from
    the Supabase ``api_keys`` table.

    Raises:
        ConfigurationError: If Supabase credentials are missing
    """
    from ..integrations.supabase import (
        SupabaseConfigurationStore,
        SupabaseIdentityProvider,
        SupabasePlatformFormatStore,
        SupabasePromptRepository,
        get_api_key,
        get_supabase_client
    )

    config = config or get_config()
    client = get_supabase_client(config.SUPABASE_URL, config.SUPABASE_KEY)

    api_key = config.LLM_API_KEY or get_api_key(client, config.LLM_PROVIDER)
    if not api_key:
        logger.warning(f"No API key found for provider {config.LLM_PROVIDER}")

    return ServiceContainer(
        configuration_store=SupabaseConfigurationStore(client, table=config.MODEL_CONFIG_TABLE),
        platform_format_store=SupabasePlatformFormatStore(client, table=config.PLATFORM_FORMATS_TABLE),
        prompt_repository=SupabasePromptRepository(client, table=config.PROMPTS_TABLE),
        identity_provider=SupabaseIdentityProvider(client),
        completion_client=LiteLLMClient(
            api_key=api_key,
            base_url=config.LLM_API_BASE,
            timeout=config.LLM_TIMEOUT
        ),
        config=config,
        supabase_client=client
    )
