"""
Generation tasks for Viral Studio.

This module contains the Celery task that runs one generation batch
outside the request cycle.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

from .celery_app import celery_app
from ..core.models.content import GenerationRequest
from ..utils.services import ServiceContainer, build_services


logger = logging.getLogger(__name__)

_services: Optional[ServiceContainer] = None


def get_worker_services() -> ServiceContainer:
    """Build the worker's ServiceContainer once per process."""
    global _services
    if _services is None:
        _services = build_services()
    return _services


def run_generation(request_data: Dict[str, Any], services: Optional[ServiceContainer] = None) -> Dict[str, Any]:
    """
    Run one generation batch synchronously.

    Args:
        request_data: Serialized GenerationRequest
        services: Collaborators; the worker's default container when omitted

    Returns:
        Serialized GenerationResult
    """
    services = services or get_worker_services()
    request = GenerationRequest(**request_data)
    result = asyncio.run(services.generation_pipeline().generate(request))
    return result.model_dump(mode="json")


@celery_app.task(bind=True, name='viral_studio.tasks.generation.process_generation_task')
def process_generation_task(self, request_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Process a generation job.

    Args:
        request_data: Serialized GenerationRequest

    Returns:
        Serialized GenerationResult
    """
    task_id = self.request.id
    start_time = time.time()
    logger.info(f"Task started: process_generation_task {task_id}")

    self.update_state(
        state='PROGRESS',
        meta={
            'current_step': 'generating',
            'platforms': request_data.get('platforms', []),
            'message': 'Generating content...'
        }
    )

    try:
        result = run_generation(request_data)
    except Exception as e:
        logger.error(f"Task error: process_generation_task {task_id}: {str(e)}", exc_info=True)
        raise

    logger.info(
        f"Task completed: process_generation_task {task_id} in {time.time() - start_time:.2f}s"
    )
    return result
