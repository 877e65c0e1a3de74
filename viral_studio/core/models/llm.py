"""
LLM-related data models and schemas.

This module defines the data structures for model configuration,
prompt messages, and provider responses.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Chat message roles."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single role-tagged message sent to the provider."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: MessageRole = Field(..., description="Message role")
    content: str = Field(..., description="Message text")


class ModelConfiguration(BaseModel):
    """
    Active model name and sampling parameters.

    Resolved once per batch from the configuration store and shared
    read-only by every invocation in that batch.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str = Field(..., min_length=1, description="Model name")
    temperature: float = Field(..., ge=0.0, le=2.0, description="Temperature")
    max_tokens: int = Field(..., ge=1, le=100000, description="Maximum tokens")
    top_p: float = Field(..., ge=0.0, le=1.0, description="Top-p sampling")
    frequency_penalty: float = Field(..., ge=-2.0, le=2.0, description="Frequency penalty")
    presence_penalty: float = Field(..., ge=-2.0, le=2.0, description="Presence penalty")

    provider: Optional[str] = Field(None, description="Provider prefix for the model string")

    @property
    def model_string(self) -> str:
        """Model identifier in provider/model form."""
        if self.provider and "/" not in self.model_name:
            return f"{self.provider}/{self.model_name}"
        return self.model_name

    def sampling_parameters(self) -> Dict[str, Any]:
        """Parameters passed through to the completion call."""
        return {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }


class LLMResponse(BaseModel):
    """Provider response model."""

    model_config = ConfigDict(protected_namespaces=())

    content: str = Field(..., description="Generated content")
    finish_reason: Optional[str] = Field(None, description="Reason for completion")

    # Usage Statistics
    prompt_tokens: int = Field(default=0, ge=0, description="Prompt tokens used")
    completion_tokens: int = Field(default=0, ge=0, description="Completion tokens used")
    total_tokens: int = Field(default=0, ge=0, description="Total tokens used")

    model: str = Field(..., description="Model used")
    response_time: float = Field(default=0.0, ge=0.0, description="Response time in seconds")

    created_at: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")

    def get_tokens_per_second(self) -> float:
        """Calculate tokens per second."""
        if self.response_time > 0:
            return self.completion_tokens / self.response_time
        return 0.0
