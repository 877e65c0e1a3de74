"""
Health checks for the API and its collaborators.

Each check returns a small status dict. ``overall_status`` folds them
into one verdict: the database is required for every request, while the
broker and workers only back the asynchronous job endpoints.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

import psutil
import redis

from .config import Config, get_config


logger = logging.getLogger(__name__)

# Components whose failure makes the whole service unusable
CRITICAL_COMPONENTS = ("database",)


def _timed(check: Callable[[], Dict[str, Any]], component: str) -> Dict[str, Any]:
    start = time.time()
    try:
        result = check()
    except Exception as e:
        logger.error(f"{component} health check failed: {str(e)}")
        return {"status": "unhealthy", "error": str(e)}
    result.setdefault("status", "healthy")
    result["response_time"] = round(time.time() - start, 4)
    return result


def overall_status(components: Dict[str, Dict[str, Any]]) -> str:
    """healthy, degraded (job endpoints affected) or unhealthy."""
    statuses = {name: component.get("status") for name, component in components.items()}
    if any(statuses.get(name) == "unhealthy" for name in CRITICAL_COMPONENTS):
        return "unhealthy"
    if any(status == "unhealthy" for status in statuses.values()):
        return "degraded"
    return "healthy"


class HealthChecker:
    """Probe Supabase, the Celery broker and workers, and the host."""

    def __init__(self, config: Optional[Config] = None, supabase_client=None):
        self.config = config or get_config()
        self.supabase_client = supabase_client

    def _broker_is_redis(self) -> bool:
        return self.config.CELERY_BROKER_URL.startswith(('redis://', 'rediss://'))

    def check_database(self) -> Dict[str, Any]:
        """Read one row of the model configuration table."""
        if self.supabase_client is None:
            return {"status": "not_configured"}

        def probe():
            self.supabase_client.table(self.config.MODEL_CONFIG_TABLE).select('id').limit(1).execute()
            return {"table": self.config.MODEL_CONFIG_TABLE}

        return _timed(probe, "database")

    def check_redis(self) -> Dict[str, Any]:
        """Ping the Celery broker when it is Redis."""
        if not self._broker_is_redis():
            return {"status": "not_configured"}

        def probe():
            client = redis.Redis.from_url(self.config.CELERY_BROKER_URL, socket_timeout=2)
            try:
                client.ping()
                info = client.info()
            finally:
                client.close()
            return {
                "version": info.get("redis_version", "unknown"),
                "memory_used": info.get("used_memory_human", "unknown"),
                "connected_clients": info.get("connected_clients", 0)
            }

        return _timed(probe, "redis")

    def check_celery(self) -> Dict[str, Any]:
        """Count workers answering on the generation queue's broker."""
        if not self._broker_is_redis():
            return {"status": "not_configured"}

        def probe():
            from ..tasks.celery_app import celery_app

            stats = celery_app.control.inspect(timeout=1.0).stats()
            if not stats:
                return {"status": "unhealthy", "error": "No Celery workers found"}
            return {"workers": len(stats)}

        return _timed(probe, "celery")

    def get_system_metrics(self) -> Dict[str, Any]:
        """Host CPU, memory and disk usage."""
        def probe():
            memory = psutil.virtual_memory()
            return {
                "cpu_percent": psutil.cpu_percent(interval=None),
                "memory_percent": memory.percent,
                "memory_available": memory.available,
                "disk_percent": psutil.disk_usage('/').percent
            }

        return _timed(probe, "system")

    def get_detailed_status(self) -> Dict[str, Any]:
        """Status of every component, keyed by component name."""
        return {
            "database": self.check_database(),
            "redis": self.check_redis(),
            "celery": self.check_celery(),
            "system": self.get_system_metrics()
        }
