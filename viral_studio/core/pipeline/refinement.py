"""
Refinement coordinator.

Re-invokes the provider with surgical-edit instructions for one stored
record, parses the result with the generation parser, and rejects any
result that would overwrite good content with a parse failure.
"""

import logging

from ...integrations.llm.invoker import GenerationInvoker
from ..models.content import ParsedContent, RefinementRequest, StoredPrompt
from ..models.errors import RecordNotFoundError, RefinementValidationError
from ..parsing import parse_completion
from ..ports import PromptRepository
from ..prompts import build_refinement_messages, PlatformFormatResolver
from ..prompts.templates import TARGET_LANGUAGE
from .configuration import ModelConfigurationResolver


logger = logging.getLogger(__name__)


def validate_refined_content(parsed: ParsedContent, record_id: str = None) -> None:
    """
    Structural completeness gate for refined content.

    Raises:
        RefinementValidationError: Empty script, zero score or no analysis items
    """
    failures = []
    if not parsed.script_body.strip():
        failures.append("script_body")
    if parsed.aggregate_score == 0:
        failures.append("aggregate_score")
    if not parsed.analysis_items:
        failures.append("analysis_items")

    if failures:
        raise RefinementValidationError(
            f"Refined content is incomplete: {', '.join(failures)}",
            failures=failures,
            record_id=record_id
        )


class RefinementCoordinator:
    """Apply one natural-language edit to existing structured content."""

    def __init__(
        self,
        configuration_resolver: ModelConfigurationResolver,
        format_resolver: PlatformFormatResolver,
        invoker: GenerationInvoker,
        language: str = TARGET_LANGUAGE
    ):
        self.configuration_resolver = configuration_resolver
        self.format_resolver = format_resolver
        self.invoker = invoker
        self.language = language

    async def refine(self, request: RefinementRequest) -> ParsedContent:
        """
        Refine one record's content.

        Returns:
            Validated ParsedContent. Persisting it is the caller's job.

        Raises:
            ConfigurationError: Model configuration missing or incomplete
            ProviderInvocationError: The provider call failed
            RefinementValidationError: The refined content failed the gate
        """
        configuration = await self.configuration_resolver.resolve_active_model_configuration()
        platform_format = await self.format_resolver.get_platform_format(request.platform)

        messages = build_refinement_messages(request, platform_format, self.language)
        raw = await self.invoker.invoke(request.platform, configuration, messages)

        parsed = parse_completion(raw, request.platform)

        try:
            validate_refined_content(parsed, request.target_record_id)
        except RefinementValidationError as e:
            logger.warning(f"Rejected refinement for {request.target_record_id}: {e.message}")
            raise

        logger.info(f"Refinement accepted for record {request.target_record_id}")
        return parsed


async def apply_refinement(
    coordinator: RefinementCoordinator,
    repository: PromptRepository,
    request: RefinementRequest,
    requester_id: str
) -> StoredPrompt:
    """
    Refine a stored record and persist the result.

    The record must be owned by ``requester_id``. The update is only
    issued after the refined content passes validation.

    Raises:
        RecordNotFoundError: The record does not exist for this requester
        RefinementValidationError: The refined content failed the gate
    """
    record = await repository.get_prompt(request.target_record_id, requester_id)
    if record is None:
        raise RecordNotFoundError(
            f"Prompt {request.target_record_id} not found",
            record_id=request.target_record_id
        )

    parsed = await coordinator.refine(request)
    return await repository.update_prompt(request.target_record_id, parsed)
