"""
Prompt construction for generation and refinement.

Builds the ordered system + user message pair sent to the provider.
Pure construction: no I/O and no validation beyond what the models
already enforce. Rejecting empty topics is the caller's job.
"""

import json
from typing import List, Optional

from ..models.content import ContextSample, PlatformFormat, RefinementRequest
from ..models.llm import Message, MessageRole
from . import templates


def serialize_context_sample(context_sample: Optional[ContextSample]) -> str:
    """JSON form of the steering sample, or the explicit "None" sentinel."""
    if context_sample is None:
        return templates.NO_CONTEXT

    return json.dumps(
        {
            "title": context_sample.title,
            "content": context_sample.body,
            "viralScore": context_sample.aggregate_score,
        },
        ensure_ascii=False
    )


def build_generation_system_prompt(language: str = templates.TARGET_LANGUAGE) -> str:
    """Fixed system instruction for first-time generation."""
    return templates.GENERATION_SYSTEM.format(
        language=language,
        sections=templates.render_sections(),
        output_format=templates.OUTPUT_FORMAT.format(language=language),
        format_rules=templates.FORMAT_RULES.format(language=language)
    )


def build_refinement_system_prompt(language: str = templates.TARGET_LANGUAGE) -> str:
    """System instruction for surgical single-section edits."""
    return templates.REFINEMENT_SYSTEM.format(
        language=language,
        output_format=templates.OUTPUT_FORMAT.format(language=language),
        format_rules=templates.FORMAT_RULES.format(language=language)
    )


def build_generation_messages(
    topic: str,
    platform: str,
    platform_format: PlatformFormat,
    context_sample: Optional[ContextSample] = None,
    language: str = templates.TARGET_LANGUAGE
) -> List[Message]:
    """
    Build the two messages for one platform of a generation batch.

    Args:
        topic: User topic
        platform: Platform identifier as requested
        platform_format: Format template for the platform (may be empty)
        context_sample: Optional previously generated content
        language: Output language the provider must write in

    Returns:
        [system message, user message]
    """
    user_prompt = templates.GENERATION_USER.format(
        topic=topic,
        platform=platform,
        platform_format=platform_format.template_text,
        context=serialize_context_sample(context_sample)
    )

    return [
        Message(role=MessageRole.SYSTEM, content=build_generation_system_prompt(language)),
        Message(role=MessageRole.USER, content=user_prompt),
    ]


def build_refinement_messages(
    request: RefinementRequest,
    platform_format: PlatformFormat,
    language: str = templates.TARGET_LANGUAGE
) -> List[Message]:
    """Build the two messages for a refinement turn."""
    user_prompt = templates.REFINEMENT_USER.format(
        topic=request.original_topic,
        platform=request.platform,
        platform_format=platform_format.template_text,
        current_content=request.current_script_body,
        instruction=request.instruction
    )

    return [
        Message(role=MessageRole.SYSTEM, content=build_refinement_system_prompt(language)),
        Message(role=MessageRole.USER, content=user_prompt),
    ]
