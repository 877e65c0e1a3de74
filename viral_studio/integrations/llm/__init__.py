"""
LLM integration module.

This module provides the provider boundary used by the generation
and refinement pipelines.
"""

from .litellm_client import LiteLLMClient
from .retry_handler import RetryHandler
from .invoker import GenerationInvoker

__all__ = [
    'LiteLLMClient',
    'RetryHandler',
    'GenerationInvoker'
]
