"""
Generation invoker.

Issues one completion per platform through the injected completion
client, with retries, and fans a multi-platform batch out concurrently.
"""

import asyncio
import logging
import time
from typing import List, Optional, Sequence, Tuple, Union

from ...core.models.errors import ProviderInvocationError
from ...core.models.llm import Message, ModelConfiguration
from ...core.ports import CompletionClient
from .retry_handler import RetryHandler


logger = logging.getLogger(__name__)

InvocationJob = Tuple[str, List[Message]]


class GenerationInvoker:
    """
    Per-platform provider invocation.

    The batch policy is all-or-nothing: every invocation runs to
    completion, then the first failure in request order is raised.
    """

    def __init__(
        self,
        client: CompletionClient,
        retry_handler: Optional[RetryHandler] = None,
        max_concurrent: int = 10
    ):
        self.client = client
        self.retry_handler = retry_handler or RetryHandler()
        self.max_concurrent = max_concurrent

    async def invoke(
        self,
        platform: str,
        configuration: ModelConfiguration,
        messages: List[Message]
    ) -> str:
        """
        Invoke the provider for one platform.

        Returns:
            Raw completion text

        Raises:
            ProviderInvocationError: Tagged with ``platform``
        """
        start_time = time.time()

        try:
            response = await self.retry_handler.run(
                platform,
                self.client.complete,
                messages,
                configuration
            )
        except ProviderInvocationError as e:
            raise ProviderInvocationError(
                message=f"Generation failed for {platform}: {e.message}",
                platform=platform,
                model=e.model or configuration.model_name,
                retryable=e.retryable
            ) from e
        except Exception as e:
            logger.error(f"Unexpected provider error for {platform}: {str(e)}", exc_info=True)
            raise ProviderInvocationError(
                message=f"Generation failed for {platform}: {str(e)}",
                platform=platform,
                model=configuration.model_name,
                retryable=False
            ) from e

        logger.info(
            f"Completion received for {platform}: {len(response.content)} chars, "
            f"{response.total_tokens} tokens in {time.time() - start_time:.2f}s "
            f"({response.get_tokens_per_second():.1f} tokens/s)"
        )
        return response.content

    async def invoke_all(
        self,
        jobs: Sequence[InvocationJob],
        configuration: ModelConfiguration
    ) -> List[str]:
        """
        Invoke every job concurrently.

        Args:
            jobs: (platform, messages) pairs in request order
            configuration: Shared read-only model configuration

        Returns:
            Raw completions, index-aligned with ``jobs``

        Raises:
            ProviderInvocationError: The first failure in request order
        """
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def invoke_single(platform: str, messages: List[Message]) -> str:
            async with semaphore:
                return await self.invoke(platform, configuration, messages)

        results: List[Union[str, BaseException]] = await asyncio.gather(
            *(invoke_single(platform, messages) for platform, messages in jobs),
            return_exceptions=True
        )

        failures = [
            (platform, result)
            for (platform, _), result in zip(jobs, results)
            if isinstance(result, BaseException)
        ]

        if failures:
            for platform, error in failures:
                logger.error(f"Batch invocation failed for {platform}: {error}")
            raise failures[0][1]

        return list(results)
