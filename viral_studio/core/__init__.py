"""
Core domain logic for Viral Studio.

Models, prompt construction, completion parsing and the generation and
refinement pipelines. Nothing in here talks to the network directly.
"""
