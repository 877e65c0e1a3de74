"""
Basic tests for Viral Studio.

This module contains basic tests to verify the system structure
and basic functionality.
"""

import pytest

from viral_studio.core.models.content import GenerationRequest, StoredPrompt, ParsedContent
from viral_studio.core.models.errors import ErrorResponse, RecordNotFoundError, ConfigurationError
from viral_studio.utils.config import get_config, validate_config, TestingConfig
from viral_studio.core.models.llm import LLMResponse
from viral_studio.utils import health
from viral_studio.utils.health import HealthChecker, overall_status


def test_generation_request_creation():
    """Test creating a generation request."""
    request = GenerationRequest(
        topic="  Dicas de Marketing ",
        platforms=["youtube", "youtube"],
        requester_id="user-1"
    )

    assert request.normalized_topic == "dicas de marketing"
    assert request.platforms == ["youtube", "youtube"]
    assert request.context_sample is None


def test_generation_request_validation():
    """Test generation request validation."""
    with pytest.raises(Exception):  # Pydantic validation error
        GenerationRequest(topic="x", platforms=[], requester_id="user-1")

    with pytest.raises(Exception):
        GenerationRequest(topic="x", platforms=["  "], requester_id="user-1")


def test_stored_prompt_row_excludes_storage_fields():
    """Test that inserts leave ids and timestamps to storage."""
    prompt = StoredPrompt(user_id="u", platform="youtube", prompt_text="t", id="p1")

    row = prompt.to_row()

    assert "id" not in row
    assert "created_at" not in row
    assert row["content_analysis"] == []


def test_parsed_content_completeness():
    """Test the parse failure signals."""
    assert not ParsedContent().is_complete


def test_error_response_from_exception():
    """Test rendering an exception as an error response."""
    error = RecordNotFoundError("Prompt p1 not found", table="prompts", record_id="p1")

    body = ErrorResponse.from_exception(error, status=404).to_json()

    assert body["error"] == "RecordNotFoundError"
    assert body["error_code"] == "RECORD_NOT_FOUND"
    assert body["details"]["record_id"] == "p1"
    assert isinstance(body["timestamp"], str)


def test_config_loading():
    """Test configuration loading."""
    config = get_config('testing')

    assert config.TESTING is True
    assert config.DEBUG is True
    assert config.LOG_LEVEL == 'CRITICAL'
    assert config.LLM_TIMEOUT == 25
    assert config.TARGET_LANGUAGE == 'Portuguese'


def test_validate_config_reports_missing_supabase():
    """Test configuration validation."""
    config = TestingConfig()
    config.SUPABASE_URL = None

    errors = validate_config(config)

    assert "SUPABASE_URL must be configured" in errors
    assert validate_config(TestingConfig()) == []


def test_health_checker_database_probe():
    """Test the database probe against a stub client."""
    class StubQuery:
        def select(self, *args):
            return self

        def limit(self, *args):
            return self

        def execute(self):
            return None

    class StubClient:
        def table(self, name):
            return StubQuery()

    checker = HealthChecker(TestingConfig(), supabase_client=StubClient())

    assert checker.check_database()["status"] == "healthy"
    assert HealthChecker(TestingConfig()).check_database()["status"] == "not_configured"
    assert checker.check_redis()["status"] == "not_configured"


def test_configuration_error_details():
    """Test configuration error details."""
    error = ConfigurationError("missing", config_key="top_p")

    assert error.error_code == "CONFIGURATION_ERROR"
    assert error.details == {"config_key": "top_p"}


def test_imports():
    """Test that all modules can be imported."""
    from viral_studio.api.app import create_app
    from viral_studio.core.pipeline import GenerationPipeline, RefinementCoordinator
    from viral_studio.integrations.llm import LiteLLMClient
    from viral_studio.integrations.supabase import SupabasePromptRepository
    from viral_studio.tasks.generation import process_generation_task

    assert create_app is not None
    assert GenerationPipeline is not None
    assert RefinementCoordinator is not None
    assert LiteLLMClient is not None
    assert SupabasePromptRepository is not None
    assert process_generation_task is not None


def test_overall_status():
    """Test folding component statuses into one verdict."""
    assert overall_status({"database": {"status": "healthy"}, "celery": {"status": "not_configured"}}) == "healthy"
    assert overall_status({"database": {"status": "healthy"}, "celery": {"status": "unhealthy"}}) == "degraded"
    assert overall_status({"database": {"status": "unhealthy"}, "celery": {"status": "healthy"}}) == "unhealthy"


def test_detailed_health_endpoint(client):
    """Test the detailed health endpoint without external services."""
    response = client.get('/api/v1/health/detailed')

    data = response.get_json()
    assert response.status_code == 200
    assert data["status"] == "healthy"
    assert data["components"]["database"]["status"] == "not_configured"
    assert data["components"]["celery"]["status"] == "not_configured"


def test_tokens_per_second():
    """Test provider throughput reporting."""
    response = LLMResponse(content="ok", model="gpt-4o-mini", completion_tokens=50, response_time=2.0)

    assert response.get_tokens_per_second() == 25.0
    assert LLMResponse(content="ok", model="gpt-4o-mini").get_tokens_per_second() == 0.0


def test_redis_check_closes_its_client(monkeypatch):
    """Test that every Redis probe releases its connection pool."""
    clients = []

    class StubRedis:
        def __init__(self):
            self.closed = False
            clients.append(self)

        def ping(self):
            return True

        def info(self):
            return {"redis_version": "7.2.0", "connected_clients": 3}

        def close(self):
            self.closed = True

    monkeypatch.setattr(health.redis.Redis, "from_url", lambda url, **kwargs: StubRedis())
    config = TestingConfig()
    config.CELERY_BROKER_URL = 'redis://localhost:6379/0'
    checker = HealthChecker(config)

    first = checker.check_redis()
    checker.check_redis()

    assert first["status"] == "healthy"
    assert first["version"] == "7.2.0"
    assert len(clients) == 2
    assert all(client.closed for client in clients)


def test_failed_redis_ping_still_closes_client(monkeypatch):
    """Test that a failing ping reports unhealthy and releases the client."""
    class UnreachableRedis:
        closed = False

        def ping(self):
            raise ConnectionError("Connection refused")

        def close(self):
            UnreachableRedis.closed = True

    monkeypatch.setattr(health.redis.Redis, "from_url", lambda url, **kwargs: UnreachableRedis())
    config = TestingConfig()
    config.CELERY_BROKER_URL = 'redis://localhost:6379/0'

    result = HealthChecker(config).check_redis()

    assert result["status"] == "unhealthy"
    assert "Connection refused" in result["error"]
    assert UnreachableRedis.closed is True
