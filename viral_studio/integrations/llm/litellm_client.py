"""
LiteLLM client implementation.

This module provides the LiteLLM integration used as the text-in/text-out
boundary to the generation provider.
"""

import logging
from typing import Optional, List
import time

from litellm import acompletion
from litellm.exceptions import (
    AuthenticationError,
    BadRequestError,
    RateLimitError,
    APIConnectionError,
    APIError,
    Timeout,
    ServiceUnavailableError
)

from ...core.models.errors import ProviderInvocationError
from ...core.models.llm import LLMResponse, Message, ModelConfiguration
from ...core.ports import CompletionClient


logger = logging.getLogger(__name__)


class LiteLLMClient(CompletionClient):
    """
    LiteLLM client for unified LLM provider access.

    Provider failures are translated into ProviderInvocationError with a
    retryable flag the RetryHandler understands.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: int = 25
    ):
        """
        Initialize LiteLLM client.

        Args:
            api_key: API key for LLM provider
            base_url: Base URL for LLM API
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

        logger.info(f"LiteLLMClient initialized with timeout: {timeout}s")

    async def complete(self, messages: List[Message], configuration: ModelConfiguration) -> LLMResponse:
        """
        Issue one completion request.

        Args:
            messages: Ordered role-tagged messages
            configuration: Resolved model configuration

        Returns:
            LLMResponse with the raw completion text

        Raises:
            ProviderInvocationError: If the provider call fails or returns no text
        """
        model = configuration.model_string

        params = {
            "model": model,
            "messages": [message.model_dump() for message in messages],
            "timeout": self.timeout,
            **configuration.sampling_parameters()
        }

        if self.api_key:
            params["api_key"] = self.api_key

        if self.base_url:
            params["api_base"] = self.base_url

        start_time = time.time()

        try:
            response = await acompletion(**params)

        except AuthenticationError as e:
            logger.error(f"Authentication error: {str(e)}")
            raise ProviderInvocationError(
                message=f"Authentication failed: {str(e)}",
                model=model,
                retryable=False
            )

        except BadRequestError as e:
            logger.error(f"Bad request: {str(e)}")
            raise ProviderInvocationError(
                message=f"Provider rejected the request: {str(e)}",
                model=model,
                retryable=False
            )

        except RateLimitError as e:
            logger.error(f"Rate limit error: {str(e)}")
            raise ProviderInvocationError(
                message=f"Rate limit exceeded: {str(e)}",
                model=model,
                retryable=True
            )

        except Timeout as e:
            logger.error(f"Timeout error: {str(e)}")
            raise ProviderInvocationError(
                message=f"Request timeout: {str(e)}",
                model=model,
                retryable=True
            )

        except (ServiceUnavailableError, APIConnectionError) as e:
            logger.error(f"Service unavailable: {str(e)}")
            raise ProviderInvocationError(
                message=f"Service unavailable: {str(e)}",
                model=model,
                retryable=True
            )

        except APIError as e:
            logger.error(f"API error: {str(e)}")
            raise ProviderInvocationError(
                message=f"API error: {str(e)}",
                model=model,
                retryable=True
            )

        response_time = time.time() - start_time

        choice = response.choices[0]
        content = choice.message.content
        if not content:
            raise ProviderInvocationError(
                message="The model did not return any content",
                model=model,
                retryable=True
            )

        usage = getattr(response, "usage", None)

        return LLMResponse(
            content=content,
            finish_reason=choice.finish_reason,
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            total_tokens=usage.total_tokens if usage else 0,
            model=model,
            response_time=response_time
        )
