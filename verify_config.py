#!/usr/bin/env python3
"""
Configuration verification script.

This script checks that the required environment variables are set,
that Supabase is reachable and that an active model configuration
can be resolved.
"""

import asyncio
import os
import sys
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()


def check_env_var(name: str, required: bool = False) -> Tuple[bool, str]:
    """Check if an environment variable is set."""
    value = os.environ.get(name)
    if value:
        if 'KEY' in name or 'SECRET' in name or 'PASSWORD' in name:
            masked = value[:10] + '...' if len(value) > 10 else '***'
            return True, f"✓ {name} is set ({masked})"
        return True, f"✓ {name} is set ({value})"
    if required:
        return False, f"✗ {name} is REQUIRED but not set"
    return False, f"⚠ {name} is not set (optional)"


def test_model_configuration() -> bool:
    """Build the services and resolve the active model configuration."""
    from viral_studio.core.models.errors import ContentStudioError
    from viral_studio.utils.config import get_config, validate_config
    from viral_studio.utils.services import build_services

    print("\n" + "=" * 60)
    print("Testing Supabase Connection")
    print("=" * 60)

    config = get_config()
    for error in validate_config(config):
        print(f"⚠ {error}")

    try:
        services = build_services(config)
        print("✓ Supabase client created successfully")

        configuration = asyncio.run(
            services.configuration_resolver().resolve_active_model_configuration()
        )
    except ContentStudioError as e:
        print(f"✗ {e.message}")
        print(f"  Check the {config.MODEL_CONFIG_TABLE} table for a row with is_active = true")
        return False

    print(f"✓ Active model: {configuration.model_string}")
    print(f"  Sampling: {configuration.sampling_parameters()}")
    return True


def main():
    """Main verification function."""
    print("=" * 60)
    print("Viral Studio - Configuration Verification")
    print("=" * 60)

    print("\nRequired Configuration:")
    print("-" * 60)
    all_required_set = True
    for var in ['SUPABASE_URL', 'SUPABASE_KEY']:
        is_set, message = check_env_var(var, required=True)
        print(message)
        if not is_set:
            all_required_set = False

    if not os.environ.get('SUPABASE_KEY'):
        is_set, message = check_env_var('SUPABASE_ANON_KEY', required=True)
        print(message)
        if is_set:
            all_required_set = True

    print("\nOptional Configuration (with fallbacks):")
    print("-" * 60)
    for var in ['LLM_PROVIDER', 'LLM_API_KEY', 'LLM_API_BASE', 'CELERY_BROKER_URL', 'CELERY_RESULT_BACKEND']:
        is_set, message = check_env_var(var, required=False)
        print(message)

    if not all_required_set:
        print("\n" + "=" * 60)
        print("✗ Missing required configuration variables")
        print("=" * 60)
        return 1

    success = test_model_configuration()

    print("\n" + "=" * 60)
    if success:
        print("✓ Configuration looks good!")
    else:
        print("✗ Configuration has issues - see above")
    print("=" * 60)
    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
