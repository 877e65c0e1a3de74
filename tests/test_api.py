"""
Tests for the Flask API.
"""

import pytest

from viral_studio.core.models.content import StoredPrompt
from viral_studio.core.models.errors import ProviderInvocationError

from conftest import completion_with_score


GENERATE_BODY = {
    "topic": "Dicas de marketing",
    "platforms": ["youtube", "instagram"],
    "user_id": "user-1"
}


class TestAuthentication:

    def test_health_is_public(self, client):
        response = client.get('/api/v1/health')

        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_missing_token_is_rejected(self, client):
        response = client.post('/api/v1/generate', json=GENERATE_BODY)

        assert response.status_code == 401
        assert response.get_json()["error_code"] == "AUTHENTICATION_ERROR"

    def test_invalid_token_is_rejected(self, client):
        response = client.post(
            '/api/v1/generate',
            json=GENERATE_BODY,
            headers={"Authorization": "Bearer nope"}
        )

        assert response.status_code == 401

    def test_non_bearer_header_is_rejected(self, client):
        response = client.post(
            '/api/v1/generate',
            json=GENERATE_BODY,
            headers={"Authorization": "Basic good-token"}
        )

        assert response.status_code == 401

    def test_request_id_header_is_returned(self, client):
        response = client.get('/api/v1/health', headers={"X-Request-ID": "req-abc"})

        assert response.headers["X-Request-ID"] == "req-abc"


class TestGenerate:

    def test_generate_returns_result_in_request_order(self, client, auth_headers, repository):
        response = client.post('/api/v1/generate', json=GENERATE_BODY, headers=auth_headers)

        assert response.status_code == 200
        body = response.get_json()
        assert [p["platform"] for p in body["prompts"]] == ["youtube", "instagram"]
        assert body["first_prompt_id"] == body["prompts"][0]["id"]
        assert body["average_viral_score"] == 82
        assert body["is_existing"] is False
        assert len(repository.created) == 2

    def test_camel_case_body_is_accepted(self, client, auth_headers):
        body = {
            "topic": "Dicas",
            "platforms": ["linkedin"],
            "userId": "user-1",
            "contextSample": {"title": "Antigo", "content": "Roteiro", "viralScore": 77}
        }

        response = client.post('/api/v1/generate', json=body, headers=auth_headers)

        assert response.status_code == 200

    def test_generating_for_another_user_is_forbidden(self, client, auth_headers, completion_client):
        body = dict(GENERATE_BODY, user_id="user-2")

        response = client.post('/api/v1/generate', json=body, headers=auth_headers)

        assert response.status_code == 403
        assert completion_client.calls == []

    @pytest.mark.parametrize("body, field", [
        ({"platforms": ["youtube"], "user_id": "user-1"}, "topic"),
        ({"topic": "x", "platforms": [], "user_id": "user-1"}, "platforms"),
        ({"topic": "   ", "platforms": ["youtube"], "user_id": "user-1"}, "topic"),
    ])
    def test_invalid_body_is_rejected(self, client, auth_headers, body, field):
        response = client.post('/api/v1/generate', json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["field"] == field

    def test_empty_body_is_rejected(self, client, auth_headers):
        response = client.post('/api/v1/generate', data="not json", headers=auth_headers)

        assert response.status_code == 400

    def test_missing_configuration_is_a_generic_failure(self, client, auth_headers, configuration_store, completion_client):
        configuration_store.row = None

        response = client.post('/api/v1/generate', json=GENERATE_BODY, headers=auth_headers)

        assert response.status_code == 500
        body = response.get_json()
        assert body["error_code"] == "CONFIGURATION_ERROR"
        assert body["message"] == "Content generation failed, please try again later"
        assert completion_client.calls == []

    def test_provider_failure_maps_to_bad_gateway(self, client, auth_headers, completion_client):
        completion_client.errors["instagram"] = ProviderInvocationError("bad key", retryable=False)

        response = client.post('/api/v1/generate', json=GENERATE_BODY, headers=auth_headers)

        assert response.status_code == 502
        assert response.get_json()["details"]["platform"] == "instagram"

    def test_retryable_provider_failure_maps_to_unavailable(self, client, auth_headers, completion_client):
        completion_client.errors["youtube"] = [ProviderInvocationError("timeout", retryable=True) for _ in range(3)]

        response = client.post('/api/v1/generate', json=GENERATE_BODY, headers=auth_headers)

        assert response.status_code == 503


class TestGenerationJobs:

    def test_job_is_enqueued(self, client, auth_headers, monkeypatch):
        enqueued = []

        class FakeTask:
            def delay(self, data):
                enqueued.append(data)
                return type("AsyncResult", (), {"id": "job-123"})()

        monkeypatch.setattr("viral_studio.tasks.generation.process_generation_task", FakeTask())

        response = client.post('/api/v1/generate/jobs', json=GENERATE_BODY, headers=auth_headers)

        assert response.status_code == 202
        assert response.get_json()["job_id"] == "job-123"
        assert enqueued[0]["requester_id"] == "user-1"
        assert enqueued[0]["platforms"] == ["youtube", "instagram"]

    def test_job_status_returns_owned_result(self, client, auth_headers, monkeypatch):
        result = {"prompts": [{"id": "p1", "user_id": "user-1"}], "first_prompt_id": "p1"}
        monkeypatch.setattr("celery.result.AsyncResult", lambda job_id, app=None: _FakeAsyncResult("SUCCESS", result))

        response = client.get('/api/v1/generate/jobs/job-123', headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()["result"]["first_prompt_id"] == "p1"

    def test_job_status_hides_other_users_results(self, client, monkeypatch):
        result = {"prompts": [{"id": "p1", "user_id": "user-1"}]}
        monkeypatch.setattr("celery.result.AsyncResult", lambda job_id, app=None: _FakeAsyncResult("SUCCESS", result))

        response = client.get('/api/v1/generate/jobs/job-123', headers={"Authorization": "Bearer other-token"})

        assert response.status_code == 404

    def test_failed_job_reports_generic_error(self, client, auth_headers, monkeypatch):
        monkeypatch.setattr(
            "celery.result.AsyncResult",
            lambda job_id, app=None: _FakeAsyncResult("FAILURE", RuntimeError("secret detail"))
        )

        response = client.get('/api/v1/generate/jobs/job-123', headers=auth_headers)

        body = response.get_json()
        assert body["status"] == "FAILURE"
        assert "secret detail" not in body["error"]


class _FakeAsyncResult:

    def __init__(self, state, result):
        self.state = state
        self.result = result
        self.info = result


class TestRefine:

    @pytest.fixture
    def stored(self, repository):
        return repository.add(StoredPrompt(
            user_id="user-1",
            platform="youtube",
            prompt_text="dicas de marketing",
            script_result="[Hook] Antigo",
            viral_score=60
        ))

    def refine_body(self, record_id, **overrides):
        body = {
            "original_topic": "dicas de marketing",
            "platform": "youtube",
            "current_script_body": "[Hook] Antigo",
            "instruction": "Mude o gancho",
            "target_record_id": record_id
        }
        body.update(overrides)
        return body

    def test_refine_updates_record(self, client, auth_headers, stored, completion_client):
        completion_client.default = completion_with_score(90, "[Hook] Novo")

        response = client.post('/api/v1/refine', json=self.refine_body(stored.id), headers=auth_headers)

        assert response.status_code == 200
        body = response.get_json()
        assert body["script_result"] == "[Hook] Novo"
        assert body["viral_score"] == 90

    def test_rejected_refinement_asks_to_rephrase(self, client, auth_headers, stored, completion_client, repository):
        completion_client.default = "Desculpe, não entendi."

        response = client.post('/api/v1/refine', json=self.refine_body(stored.id), headers=auth_headers)

        assert response.status_code == 422
        body = response.get_json()
        assert body["message"] == "Could not apply that change, try rephrasing"
        assert body["details"]["failures"] == ["script_body", "aggregate_score", "analysis_items"]
        assert repository.rows[stored.id].script_result == "[Hook] Antigo"

    def test_refining_foreign_record_is_not_found(self, client, stored):
        response = client.post(
            '/api/v1/refine',
            json=self.refine_body(stored.id),
            headers={"Authorization": "Bearer other-token"}
        )

        assert response.status_code == 404

    def test_web_client_field_names_are_accepted(self, client, auth_headers, stored, completion_client):
        completion_client.default = completion_with_score(75, "[Hook] Outro")
        body = {
            "originalTopic": "dicas de marketing",
            "platform": "youtube",
            "currentContent": "[Hook] Antigo",
            "message": "Mude o gancho",
            "promptId": stored.id
        }

        response = client.post('/api/v1/refine', json=body, headers=auth_headers)

        assert response.status_code == 200

    def test_blank_instruction_is_rejected(self, client, auth_headers, stored):
        response = client.post(
            '/api/v1/refine',
            json=self.refine_body(stored.id, instruction="   "),
            headers=auth_headers
        )

        assert response.status_code == 400


def test_unknown_route_returns_json_404(client):
    response = client.get('/api/v1/nope')

    assert response.status_code == 404
    assert response.get_json()["status"] == 404
