"""
Content-related data models and schemas.

This module defines the request, parsed-result and stored-record
structures that flow through the generation and refinement pipeline.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_topic(topic: str) -> str:
    """Canonical form of a topic used for storage and duplicate lookup."""
    return topic.strip().lower()


class ContextSample(BaseModel):
    """Previously generated content supplied back as a steering example."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title or topic of the sample")
    body: str = Field(..., description="Sample script body")
    aggregate_score: int = Field(default=0, ge=0, le=100, description="Sample viral score")


class GenerationRequest(BaseModel):
    """One user action asking for content on one topic across platforms."""

    model_config = ConfigDict(frozen=True)

    topic: str = Field(..., min_length=1, max_length=2000, description="Content topic")
    platforms: List[str] = Field(..., min_length=1, description="Target platforms, in request order")
    requester_id: str = Field(..., min_length=1, description="Requesting identity")
    context_sample: Optional[ContextSample] = Field(None, description="Optional steering example")

    @field_validator('topic')
    @classmethod
    def validate_topic(cls, v):
        """Reject blank topics."""
        if not v.strip():
            raise ValueError('topic must not be blank')
        return v

    @field_validator('platforms')
    @classmethod
    def validate_platforms(cls, v):
        """Reject blank platform identifiers."""
        if any(not platform.strip() for platform in v):
            raise ValueError('platform identifiers must not be blank')
        return v

    @property
    def normalized_topic(self) -> str:
        return normalize_topic(self.topic)


class PlatformFormat(BaseModel):
    """Formatting template for one platform. An empty template is valid."""

    model_config = ConfigDict(frozen=True)

    platform_id: str
    template_text: str = ""


class AnalysisItem(BaseModel):
    """One named, scored, described dimension of content quality."""

    title: str = Field(..., description="Dimension name")
    score: int = Field(..., ge=0, le=10, description="Score out of 10")
    description: str = Field(..., description="Explanation of the score")


class ParsedContent(BaseModel):
    """
    Structured artifacts extracted from one raw completion.

    Empty ``script_body``, empty ``analysis_items`` and a zero
    ``aggregate_score`` are parse failure signals, not valid content.
    ``has_aggregate_score`` tells a parsed zero apart from a missing block.
    """

    script_body: str = Field(default="", description="Cleaned script text")
    analysis_items: List[AnalysisItem] = Field(default_factory=list, description="Scored analysis")
    aggregate_score: int = Field(default=0, ge=0, le=100, description="Viral score")
    has_aggregate_score: bool = Field(default=False, description="Whether a score block was found")

    @property
    def is_complete(self) -> bool:
        """True when every artifact carries usable content."""
        return bool(self.script_body.strip()) and bool(self.analysis_items) and self.aggregate_score != 0


class RefinementRequest(BaseModel):
    """One refinement chat turn against an existing stored record."""

    model_config = ConfigDict(frozen=True)

    original_topic: str = Field(..., min_length=1, description="Topic the record was generated for")
    platform: str = Field(..., min_length=1, description="Platform of the record")
    current_script_body: str = Field(..., min_length=1, description="Script currently stored")
    instruction: str = Field(..., min_length=1, max_length=2000, description="Requested change")
    target_record_id: str = Field(..., min_length=1, description="Record to update")

    @field_validator('instruction')
    @classmethod
    def validate_instruction(cls, v):
        """Reject blank instructions."""
        if not v.strip():
            raise ValueError('instruction must not be blank')
        return v


class PlatformResult(BaseModel):
    """Parsed content paired with the platform it was generated for."""

    platform: str
    content: ParsedContent


class StoredPrompt(BaseModel):
    """Persisted generation record."""

    id: Optional[str] = Field(None, description="Record ID assigned by storage")
    user_id: str = Field(..., description="Owner identity")
    platform: str = Field(..., description="Platform identifier")
    prompt_text: str = Field(..., description="Normalized topic")
    script_result: str = Field(default="", description="Parsed script body")
    content_analysis: List[AnalysisItem] = Field(default_factory=list, description="Parsed analysis")
    viral_score: int = Field(default=0, ge=0, le=100, description="Parsed viral score")
    hidden: bool = Field(default=False, description="Soft-deleted flag")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @classmethod
    def from_parsed(cls, request: GenerationRequest, platform: str, content: ParsedContent) -> 'StoredPrompt':
        """Build the record emitted for one platform of a generation batch."""
        return cls(
            user_id=request.requester_id,
            platform=platform,
            prompt_text=request.normalized_topic,
            script_result=content.script_body,
            content_analysis=list(content.analysis_items),
            viral_score=content.aggregate_score,
        )

    def to_row(self) -> dict:
        """Column values for an insert, without storage-managed fields."""
        return self.model_dump(mode="json", exclude={"id", "created_at", "updated_at"})


class GenerationResult(BaseModel):
    """Outcome of one generation batch."""

    prompts: List[StoredPrompt] = Field(default_factory=list, description="Records in request order")
    first_prompt_id: Optional[str] = Field(None, description="ID of the first platform's record")
    average_viral_score: int = Field(default=0, ge=0, le=100, description="Rounded mean viral score")
    is_existing: bool = Field(default=False, description="Result reused a stored record")
