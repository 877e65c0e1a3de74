"""
Middleware components for Viral Studio.

This module contains middleware for authentication, logging,
and error handling.
"""

from .auth import AuthMiddleware, require_identity
from .logging import LoggingMiddleware
from .error_handler import ErrorHandler

__all__ = [
    'AuthMiddleware',
    'require_identity',
    'LoggingMiddleware',
    'ErrorHandler'
]
