"""
API endpoints for Viral Studio.

This module contains all the REST API endpoints for the system.
"""

from .generation import generation_bp
from .refinement import refinement_bp
from .health import health_bp

__all__ = [
    'generation_bp',
    'refinement_bp',
    'health_bp'
]
