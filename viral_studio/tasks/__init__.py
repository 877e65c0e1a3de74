"""
Background tasks for Viral Studio.
"""
