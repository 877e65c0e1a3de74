"""
Configuration management for Viral Studio.

This module provides configuration loading and management
for the application. The generation model itself is not configured
here: it is read from the model configuration table for every batch.
"""

import os
from typing import Optional, List
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY: str = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG: bool = os.environ.get('DEBUG', 'false').lower() == 'true'
    TESTING: bool = os.environ.get('TESTING', 'false').lower() == 'true'

    # API settings
    API_TITLE: str = 'Viral Studio'
    API_VERSION: str = '1.0.0'

    # Rate limiting
    RATELIMIT_STORAGE_URL: str = os.environ.get('RATELIMIT_STORAGE_URL', 'memory://')
    RATELIMIT_DEFAULT: str = os.environ.get('RATELIMIT_DEFAULT', '1000 per hour')
    RATELIMIT_GENERATE: str = os.environ.get('RATELIMIT_GENERATE', '30 per minute')

    # Logging
    LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FILE: str = os.environ.get('LOG_FILE', 'logs/app.log')
    LOG_MAX_BYTES: int = int(os.environ.get('LOG_MAX_BYTES', 10485760))  # 10MB
    LOG_BACKUP_COUNT: int = int(os.environ.get('LOG_BACKUP_COUNT', 5))
    LOG_REQUESTS: bool = os.environ.get('LOG_REQUESTS', 'true').lower() == 'true'

    # Supabase
    SUPABASE_URL: Optional[str] = os.environ.get('SUPABASE_URL')
    SUPABASE_KEY: Optional[str] = os.environ.get('SUPABASE_KEY') or os.environ.get('SUPABASE_ANON_KEY')
    MODEL_CONFIG_TABLE: str = os.environ.get('MODEL_CONFIG_TABLE', 'model_configurations')
    PLATFORM_FORMATS_TABLE: str = os.environ.get('PLATFORM_FORMATS_TABLE', 'platform_formats')
    PROMPTS_TABLE: str = os.environ.get('PROMPTS_TABLE', 'prompts')

    # Generation provider
    LLM_PROVIDER: Optional[str] = os.environ.get('LLM_PROVIDER', 'openai')
    LLM_API_KEY: Optional[str] = os.environ.get('LLM_API_KEY')
    LLM_API_BASE: Optional[str] = os.environ.get('LLM_API_BASE')
    LLM_TIMEOUT: int = int(os.environ.get('LLM_TIMEOUT', '25'))
    LLM_MAX_RETRIES: int = int(os.environ.get('LLM_MAX_RETRIES', '2'))
    LLM_RETRY_DELAY: float = float(os.environ.get('LLM_RETRY_DELAY', '1.0'))

    # Generation behaviour
    TARGET_LANGUAGE: str = os.environ.get('TARGET_LANGUAGE', 'Portuguese')
    REUSE_EXISTING_PROMPTS: bool = os.environ.get('REUSE_EXISTING_PROMPTS', 'true').lower() == 'true'
    MAX_PARALLEL_REQUESTS: int = int(os.environ.get('MAX_PARALLEL_REQUESTS', '10'))

    # Celery configuration
    CELERY_BROKER_URL: str = os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0')
    CELERY_RESULT_BACKEND: str = os.environ.get('CELERY_RESULT_BACKEND', 'redis://localhost:6379/0')
    CELERY_TASK_TIME_LIMIT: int = int(os.environ.get('CELERY_TASK_TIME_LIMIT', '600'))  # 10 minutes
    CELERY_TASK_SOFT_TIME_LIMIT: int = int(os.environ.get('CELERY_TASK_SOFT_TIME_LIMIT', '540'))  # 9 minutes
    CELERY_WORKER_PREFETCH_MULTIPLIER: int = int(os.environ.get('CELERY_WORKER_PREFETCH_MULTIPLIER', '1'))
    CELERY_WORKER_MAX_TASKS_PER_CHILD: int = int(os.environ.get('CELERY_WORKER_MAX_TASKS_PER_CHILD', '1000'))

    # Request settings
    MAX_CONTENT_LENGTH: int = int(os.environ.get('MAX_CONTENT_LENGTH', 1048576))  # 1MB

    # CORS settings
    CORS_ORIGINS: List[str] = field(default_factory=lambda: os.environ.get('CORS_ORIGINS', '*').split(','))


@dataclass
class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG: bool = True
    LOG_LEVEL: str = 'DEBUG'
    RATELIMIT_DEFAULT: str = '5000 per hour'


@dataclass
class ProductionConfig(Config):
    """Production configuration."""
    DEBUG: bool = False
    LOG_LEVEL: str = 'WARNING'


@dataclass
class TestingConfig(Config):
    """Testing configuration."""
    TESTING: bool = True
    DEBUG: bool = True
    LOG_LEVEL: str = 'CRITICAL'
    LOG_FILE: str = ''
    RATELIMIT_ENABLED: bool = False
    SUPABASE_URL: Optional[str] = 'http://localhost:54321'
    SUPABASE_KEY: Optional[str] = 'test-supabase-key'
    LLM_API_KEY: Optional[str] = 'test-llm-key'
    CELERY_BROKER_URL: str = 'memory://'
    CELERY_RESULT_BACKEND: str = 'cache+memory://'


def get_config(config_name: str = None) -> Config:
    """
    Get configuration based on environment.

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Configuration object
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development').lower()

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig
    }

    config_class = config_map.get(config_name, DevelopmentConfig)
    return config_class()


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors
    """
    errors = []

    if not config.SUPABASE_URL:
        errors.append("SUPABASE_URL must be configured")

    if not config.SUPABASE_KEY:
        errors.append("SUPABASE_KEY must be configured")

    if config.SECRET_KEY == 'dev-secret-key-change-in-production' and config.DEBUG is False:
        errors.append("SECRET_KEY must be changed in production")

    if config.LLM_TIMEOUT <= 0:
        errors.append("LLM_TIMEOUT must be positive")

    if config.MAX_PARALLEL_REQUESTS < 1:
        errors.append("MAX_PARALLEL_REQUESTS must be at least 1")

    # Celery
    if not config.CELERY_BROKER_URL:
        errors.append("CELERY_BROKER_URL must be configured")

    if not config.CELERY_RESULT_BACKEND:
        errors.append("CELERY_RESULT_BACKEND must be configured")

    return errors
