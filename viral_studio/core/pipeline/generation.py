"""
Generation pipeline.

Prompt Builder -> Generation Invoker -> Response Parser -> persisted
records, for every platform of one GenerationRequest.
"""

import asyncio
import logging
import math
from typing import List, Optional

from ...integrations.llm.invoker import GenerationInvoker
from ..models.content import (
    GenerationRequest,
    GenerationResult,
    PlatformResult,
    StoredPrompt
)
from ..models.errors import PersistenceError
from ..parsing import parse_completion
from ..ports import PromptRepository
from ..prompts import build_generation_messages, PlatformFormatResolver
from ..prompts.templates import TARGET_LANGUAGE
from .configuration import ModelConfigurationResolver


logger = logging.getLogger(__name__)


def average_score(scores: List[int]) -> int:
    """Mean of the scores rounded half up; 0 for an empty list."""
    if not scores:
        return 0
    return int(math.floor(sum(scores) / len(scores) + 0.5))


class GenerationPipeline:
    """Run one generation batch end to end."""

    def __init__(
        self,
        configuration_resolver: ModelConfigurationResolver,
        format_resolver: PlatformFormatResolver,
        invoker: GenerationInvoker,
        repository: PromptRepository,
        language: str = TARGET_LANGUAGE,
        reuse_existing: bool = True
    ):
        self.configuration_resolver = configuration_resolver
        self.format_resolver = format_resolver
        self.invoker = invoker
        self.repository = repository
        self.language = language
        self.reuse_existing = reuse_existing

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate, parse and store content for every requested platform.

        Args:
            request: Validated generation request

        Returns:
            GenerationResult with records in request order

        Raises:
            ConfigurationError: Model configuration missing or incomplete
            ProviderInvocationError: Any platform's invocation failed
            PersistenceError: A record could not be stored
        """
        if self.reuse_existing:
            existing = await self._find_existing(request)
            if existing is not None:
                logger.info(f"Reusing stored prompt {existing.id} for {existing.platform}")
                return GenerationResult(
                    prompts=[existing],
                    first_prompt_id=existing.id,
                    average_viral_score=existing.viral_score,
                    is_existing=True
                )

        platform_results = await self.run_batch(request)
        prompts = await self._store(request, platform_results)

        return GenerationResult(
            prompts=prompts,
            first_prompt_id=prompts[0].id if prompts else None,
            average_viral_score=average_score([p.content.aggregate_score for p in platform_results])
        )

    async def run_batch(self, request: GenerationRequest) -> List[PlatformResult]:
        """Build, invoke and parse every platform without storing anything."""
        configuration = await self.configuration_resolver.resolve_active_model_configuration()

        formats = await asyncio.gather(
            *(self.format_resolver.get_platform_format(platform) for platform in request.platforms)
        )

        jobs = [
            (
                platform,
                build_generation_messages(
                    request.topic,
                    platform,
                    platform_format,
                    request.context_sample,
                    self.language
                )
            )
            for platform, platform_format in zip(request.platforms, formats)
        ]

        logger.info(
            f"Generating content for {len(jobs)} platform(s): {', '.join(request.platforms)}"
        )
        completions = await self.invoker.invoke_all(jobs, configuration)

        return [
            PlatformResult(platform=platform, content=parse_completion(raw, platform))
            for platform, raw in zip(request.platforms, completions)
        ]

    async def _find_existing(self, request: GenerationRequest) -> Optional[StoredPrompt]:
        for platform in request.platforms:
            try:
                existing = await self.repository.find_existing(
                    request.requester_id,
                    platform,
                    request.normalized_topic
                )
            except PersistenceError as e:
                logger.warning(f"Existing prompt lookup failed for {platform}: {e.message}")
                continue
            if existing is not None:
                return existing
        return None

    async def _store(self, request: GenerationRequest, results: List[PlatformResult]) -> List[StoredPrompt]:
        stored = []
        for result in results:
            record = StoredPrompt.from_parsed(request, result.platform, result.content)
            stored.append(await self.repository.create_prompt(record))
        logger.info(f"Stored {len(stored)} prompt(s) for user {request.requester_id}")
        return stored
