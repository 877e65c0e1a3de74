"""
Generation and refinement API schemas.

Field names accept both snake_case and the camelCase keys sent by the
web client.
"""

from typing import Any, Callable, List, Optional, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ...core.models.content import ContextSample, GenerationRequest, RefinementRequest
from ...core.models.errors import ValidationError


SchemaT = TypeVar('SchemaT', bound=BaseModel)


class ContextSampleSchema(BaseModel):
    """Schema for the optional steering example."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    body: str = Field(..., validation_alias=AliasChoices('body', 'content', 'script'))
    aggregate_score: int = Field(
        0,
        ge=0,
        le=100,
        validation_alias=AliasChoices('aggregate_score', 'viral_score', 'viralScore')
    )


class GenerateRequestSchema(BaseModel):
    """Schema for generation request validation."""

    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(..., min_length=1, max_length=2000)
    platforms: List[str] = Field(..., min_length=1, max_length=10)
    user_id: str = Field(..., min_length=1, validation_alias=AliasChoices('user_id', 'userId'))
    context_sample: Optional[ContextSampleSchema] = Field(
        None,
        validation_alias=AliasChoices('context_sample', 'contextSample')
    )

    def to_generation_request(self) -> GenerationRequest:
        sample = None
        if self.context_sample is not None:
            sample = ContextSample(**self.context_sample.model_dump())
        return GenerationRequest(
            topic=self.topic,
            platforms=self.platforms,
            requester_id=self.user_id,
            context_sample=sample
        )


class RefineRequestSchema(BaseModel):
    """Schema for refinement request validation."""

    model_config = ConfigDict(populate_by_name=True)

    original_topic: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices('original_topic', 'originalTopic', 'topic')
    )
    platform: str = Field(..., min_length=1)
    current_script_body: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices('current_script_body', 'current_content', 'currentContent')
    )
    instruction: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        validation_alias=AliasChoices('instruction', 'message')
    )
    target_record_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices('target_record_id', 'prompt_id', 'promptId')
    )

    def to_refinement_request(self) -> RefinementRequest:
        return RefinementRequest(**self.model_dump())


def _to_validation_error(error: PydanticValidationError) -> ValidationError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get('loc', ())) or None
    return ValidationError(
        f"Invalid request: {first.get('msg', 'invalid value')}",
        field=field,
        value=first.get('input') if field else None
    )


def parse_body(schema: Type[SchemaT], data: Any) -> SchemaT:
    """
    Validate a JSON body against a schema.

    Raises:
        ValidationError: Naming the first offending field
    """
    if not isinstance(data, dict) or not data:
        raise ValidationError("Request body is required")

    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise _to_validation_error(e)


def build_model(factory: Callable[[], Any]) -> Any:
    """Run a model factory, reporting pydantic failures as ValidationError."""
    try:
        return factory()
    except PydanticValidationError as e:
        raise _to_validation_error(e)
