"""
HTTP API for Viral Studio.
"""
