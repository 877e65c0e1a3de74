#!/usr/bin/env python3
"""
Setup script for Viral Studio.
"""

from setuptools import setup, find_packages


setup(
    name='viral-studio',
    version='1.0.0',
    description='Multi-platform content generation and refinement service',
    packages=find_packages(include=['viral_studio', 'viral_studio.*']),
    python_requires='>=3.9',
    install_requires=[
        'pydantic>=2.5',
        'python-dotenv>=1.0',
        'litellm>=1.40',
        'supabase>=2.3',
        'flask>=3.0',
        'flask-cors>=4.0',
        'flask-limiter>=3.5',
        'celery>=5.3',
        'redis>=5.0',
        'psutil>=5.9',
    ],
    extras_require={
        'test': [
            'pytest>=7.4',
            'pytest-asyncio>=0.23',
        ],
    },
)
