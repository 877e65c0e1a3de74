"""
Celery application for background generation jobs.

Generation batches can take tens of seconds per platform, so workers
take one job at a time and acknowledge it only once it finishes.
"""

from celery import Celery

from ..utils.config import Config, get_config

GENERATION_QUEUE = 'generation'


def make_celery(config: Config) -> Celery:
    """Build the Celery application from a Config."""
    app = Celery('viral_studio', include=['viral_studio.tasks.generation'])
    app.conf.update(
        broker_url=config.CELERY_BROKER_URL,
        result_backend=config.CELERY_RESULT_BACKEND,
        task_serializer='json',
        accept_content=['json'],
        result_serializer='json',
        timezone='UTC',
        enable_utc=True,
        task_track_started=True,
        task_acks_late=True,
        result_expires=86400,
        task_time_limit=config.CELERY_TASK_TIME_LIMIT,
        task_soft_time_limit=config.CELERY_TASK_SOFT_TIME_LIMIT,
        worker_prefetch_multiplier=config.CELERY_WORKER_PREFETCH_MULTIPLIER,
        worker_max_tasks_per_child=config.CELERY_WORKER_MAX_TASKS_PER_CHILD,
        task_routes={'viral_studio.tasks.generation.*': {'queue': GENERATION_QUEUE}},
    )
    return app


celery_app = make_celery(get_config())
