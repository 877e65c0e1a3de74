"""
Viral Studio - AI content generation and refinement service.

Turns a topic into platform-specific scripts with a scored content
analysis and a viral score, and applies targeted edits to stored scripts.
"""

__version__ = "1.0.0"
__author__ = "Viral Studio Team"
