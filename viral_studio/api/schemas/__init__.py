"""
Request schemas for the Viral Studio API.
"""

from .generation import (
    ContextSampleSchema,
    GenerateRequestSchema,
    RefineRequestSchema,
    build_model,
    parse_body
)

__all__ = [
    'ContextSampleSchema',
    'GenerateRequestSchema',
    'RefineRequestSchema',
    'build_model',
    'parse_body'
]
