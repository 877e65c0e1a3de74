"""
Generation API endpoints for Viral Studio.

This module provides the synchronous generation endpoint and the
Celery-backed job endpoints.
"""

import asyncio
import logging
from datetime import datetime
from flask import Blueprint, request, jsonify, g

from ...core.models.content import GenerationRequest
from ...core.models.errors import AuthorizationError, ErrorResponse
from ..extensions import generation_limit, get_services, limiter
from ..middleware.auth import require_identity
from ..schemas import GenerateRequestSchema, build_model, parse_body

logger = logging.getLogger(__name__)

generation_bp = Blueprint('generation', __name__, url_prefix='/api/v1')

GENERIC_JOB_FAILURE = "Content generation failed, please try again later"


def _read_generation_request() -> GenerationRequest:
    """Validate the body and check the requester against the authenticated identity."""
    schema = parse_body(GenerateRequestSchema, request.get_json(silent=True))
    generation_request = build_model(schema.to_generation_request)

    if generation_request.requester_id != g.identity_id:
        raise AuthorizationError(
            "Cannot generate content on behalf of another user",
            requester_id=generation_request.requester_id
        )
    return generation_request

@generation_bp.route('/generate', methods=['POST'])
@require_identity
@limiter.limit(generation_limit)
def generate_content():
    """
    Generate content for every requested platform.

    Expected JSON body:
    {
        "topic": "Content topic",
        "platforms": ["youtube", "instagram"],
        "user_id": "Requesting user id",
        "context_sample": {"title": "...", "body": "...", "aggregate_score": 80}
    }
    """
    generation_request = _read_generation_request()

    pipeline = get_services().generation_pipeline()
    result = asyncio.run(pipeline.generate(generation_request))

    logger.info(
        f"Generated {len(result.prompts)} prompt(s) for {generation_request.requester_id} "
        f"(existing={result.is_existing})"
    )
    return jsonify(result.model_dump(mode="json")), 200

@generation_bp.route('/generate/jobs', methods=['POST'])
@require_identity
@limiter.limit(generation_limit)
def create_generation_job():
    """Enqueue a generation batch and return its job id."""
    generation_request = _read_generation_request()

    from ...tasks.generation import process_generation_task

    task = process_generation_task.delay(generation_request.model_dump(mode="json"))
    logger.info(f"Generation job created: {task.id} for {generation_request.requester_id}")

    return jsonify({
        "job_id": task.id,
        "status": "PENDING",
        "platforms": generation_request.platforms,
        "created_at": datetime.utcnow().isoformat()
    }), 202

@generation_bp.route('/generate/jobs/<job_id>', methods=['GET'])
@require_identity
def get_generation_job(job_id):
    """
    Get the status of a generation job.

    Args:
        job_id: Celery task id

    Returns:
        Job state, with the GenerationResult once it succeeded
    """
    from celery.result import AsyncResult
    from ...tasks.celery_app import celery_app

    task_result = AsyncResult(job_id, app=celery_app)
    state = task_result.state

    response = {
        "job_id": job_id,
        "status": state,
        "timestamp": datetime.utcnow().isoformat()
    }

    if state == 'SUCCESS':
        result = task_result.result or {}
        owners = {prompt.get('user_id') for prompt in result.get('prompts', [])}
        if owners and owners != {g.identity_id}:
            return jsonify(ErrorResponse(
                error="job_not_found",
                message="Generation job not found",
                error_code="JOB_NOT_FOUND",
                status=404
            ).to_json()), 404
        response["result"] = result
    elif state == 'FAILURE':
        response["error"] = GENERIC_JOB_FAILURE
    elif state == 'PROGRESS' and isinstance(task_result.info, dict):
        response["progress"] = task_result.info

    return jsonify(response), 200
