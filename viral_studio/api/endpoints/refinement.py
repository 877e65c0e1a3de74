"""
Refinement API endpoint for Viral Studio.
"""

import asyncio
import logging
from flask import Blueprint, request, jsonify, g

from ...core.pipeline import apply_refinement
from ..extensions import generation_limit, get_services, limiter
from ..middleware.auth import require_identity
from ..schemas import RefineRequestSchema, build_model, parse_body


logger = logging.getLogger(__name__)

refinement_bp = Blueprint('refinement', __name__, url_prefix='/api/v1')


@refinement_bp.route('/refine', methods=['POST'])
@require_identity
@limiter.limit(generation_limit)
def refine_content():
    """
    Apply one natural-language change to a stored prompt.

    Expected JSON body:
    {
        "original_topic": "Topic the prompt was generated for",
        "platform": "youtube",
        "current_script_body": "Script currently shown to the user",
        "instruction": "Make the hook shorter",
        "target_record_id": "Stored prompt id"
    }
    """
    schema = parse_body(RefineRequestSchema, request.get_json(silent=True))
    refinement_request = build_model(schema.to_refinement_request)

    services = get_services()
    updated = asyncio.run(apply_refinement(
        services.refinement_coordinator(),
        services.prompt_repository,
        refinement_request,
        g.identity_id
    ))

    logger.info(f"Refined prompt {refinement_request.target_record_id} for {g.identity_id}")
    return jsonify(updated.model_dump(mode="json")), 200
