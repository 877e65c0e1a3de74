"""
Utility functions for Viral Studio.
"""
