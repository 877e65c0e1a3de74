"""
External service integrations for Viral Studio.

This module contains clients for integrating with external services
like the LLM provider and the Supabase project.
"""
