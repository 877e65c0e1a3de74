"""
Data models and schemas for Viral Studio.

This module contains all the data models, validation schemas, and
type definitions used throughout the system.
"""

from .content import (
    ContextSample,
    GenerationRequest,
    PlatformFormat,
    AnalysisItem,
    ParsedContent,
    RefinementRequest,
    PlatformResult,
    StoredPrompt,
    GenerationResult,
    normalize_topic
)

from .llm import (
    MessageRole,
    Message,
    ModelConfiguration,
    LLMResponse
)

from .errors import (
    ContentStudioError,
    ValidationError,
    ConfigurationError,
    ProviderInvocationError,
    RefinementValidationError,
    AuthenticationError,
    AuthorizationError,
    PersistenceError,
    RecordNotFoundError,
    ErrorResponse
)

__all__ = [
    # Content models
    'ContextSample',
    'GenerationRequest',
    'PlatformFormat',
    'AnalysisItem',
    'ParsedContent',
    'RefinementRequest',
    'PlatformResult',
    'StoredPrompt',
    'GenerationResult',
    'normalize_topic',

    # LLM models
    'MessageRole',
    'Message',
    'ModelConfiguration',
    'LLMResponse',

    # Error models
    'ContentStudioError',
    'ValidationError',
    'ConfigurationError',
    'ProviderInvocationError',
    'RefinementValidationError',
    'AuthenticationError',
    'AuthorizationError',
    'PersistenceError',
    'RecordNotFoundError',
    'ErrorResponse'
]
