#!/usr/bin/env python3
"""
Celery worker runner for Viral Studio.

This script starts a Celery worker to process generation jobs.
"""

import os
import sys
import logging

from viral_studio.tasks.celery_app import GENERATION_QUEUE, celery_app
# Import tasks to register them
from viral_studio.tasks.generation import process_generation_task  # noqa: F401

logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s: %(levelname)s/%(processName)s] %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Start the Celery worker."""
    try:
        logger.info("Starting Viral Studio Celery Worker...")
        logger.info(f"Worker will process tasks from the '{GENERATION_QUEUE}' queue")

        worker = celery_app.Worker(
            queues=[GENERATION_QUEUE],
            concurrency=int(os.environ.get('CELERY_CONCURRENCY', 2)),
            loglevel='info',
            hostname='viral-studio-worker@%h'
        )

        worker.start()

    except KeyboardInterrupt:
        logger.info("Worker stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Worker failed to start: {str(e)}")
        sys.exit(1)


if __name__ == '__main__':
    main()
