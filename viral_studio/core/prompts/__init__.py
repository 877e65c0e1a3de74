"""
Prompt construction for Viral Studio.
"""

from .builder import (
    build_generation_messages,
    build_refinement_messages,
    serialize_context_sample
)
from .platforms import PlatformFormatResolver, BUILTIN_PLATFORM_FORMATS, get_builtin_format

__all__ = [
    'build_generation_messages',
    'build_refinement_messages',
    'serialize_context_sample',
    'PlatformFormatResolver',
    'BUILTIN_PLATFORM_FORMATS',
    'get_builtin_format'
]
