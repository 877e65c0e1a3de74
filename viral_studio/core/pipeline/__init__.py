"""
Generation and refinement pipelines.
"""

from .configuration import ModelConfigurationResolver, decode_settings
from .generation import GenerationPipeline, average_score
from .refinement import RefinementCoordinator, apply_refinement, validate_refined_content

__all__ = [
    'ModelConfigurationResolver',
    'decode_settings',
    'GenerationPipeline',
    'average_score',
    'RefinementCoordinator',
    'apply_refinement',
    'validate_refined_content'
]
