"""
Tests for the end-to-end generation pipeline.
"""

import pytest

from viral_studio.core.models.content import ContextSample, GenerationRequest, StoredPrompt
from viral_studio.core.models.errors import (
    ConfigurationError,
    PersistenceError,
    ProviderInvocationError
)
from viral_studio.core.pipeline import GenerationPipeline, ModelConfigurationResolver, average_score
from viral_studio.core.prompts import PlatformFormatResolver

from conftest import (
    FakeCompletionClient,
    FakeConfigurationStore,
    FakePlatformFormatStore,
    InMemoryPromptRepository,
    completion_with_score
)


def make_pipeline(configuration_store, completion_client, repository, invoker_factory, format_store=None, reuse_existing=True):
    return GenerationPipeline(
        ModelConfigurationResolver(configuration_store),
        PlatformFormatResolver(format_store),
        invoker_factory(completion_client),
        repository,
        reuse_existing=reuse_existing
    )


@pytest.fixture
def invoker_factory(retry_handler):
    from viral_studio.integrations.llm import GenerationInvoker

    def factory(client):
        return GenerationInvoker(client, retry_handler=retry_handler)
    return factory


def request_for(*platforms, topic="  Dicas de Marketing  ", context_sample=None):
    return GenerationRequest(
        topic=topic,
        platforms=list(platforms),
        requester_id="user-1",
        context_sample=context_sample
    )


@pytest.mark.asyncio
async def test_generates_and_stores_one_record_per_platform(configuration_store, repository, invoker_factory):
    client = FakeCompletionClient(responses={
        "youtube": completion_with_score(80, "Roteiro YouTube"),
        "instagram": completion_with_score(71, "Roteiro Instagram"),
    })
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory)

    result = await pipeline.generate(request_for("youtube", "instagram"))

    assert [p.platform for p in result.prompts] == ["youtube", "instagram"]
    assert [p.script_result for p in result.prompts] == ["Roteiro YouTube", "Roteiro Instagram"]
    assert [p.viral_score for p in result.prompts] == [80, 71]
    assert result.first_prompt_id == result.prompts[0].id
    assert result.average_viral_score == 76
    assert result.is_existing is False

    stored = repository.created[0]
    assert stored.prompt_text == "dicas de marketing"
    assert stored.user_id == "user-1"
    assert stored.content_analysis[0].title == "Gancho"


@pytest.mark.asyncio
async def test_missing_configuration_stops_before_any_invocation(repository, invoker_factory):
    client = FakeCompletionClient()
    pipeline = make_pipeline(FakeConfigurationStore(None), client, repository, invoker_factory)

    with pytest.raises(ConfigurationError):
        await pipeline.generate(request_for("youtube", "instagram"))

    assert client.calls == []
    assert repository.created == []


@pytest.mark.asyncio
async def test_provider_failure_aborts_batch_without_storing(configuration_store, repository, invoker_factory):
    client = FakeCompletionClient(errors={"instagram": ProviderInvocationError("down", retryable=False)})
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory)

    with pytest.raises(ProviderInvocationError) as exc_info:
        await pipeline.generate(request_for("youtube", "instagram"))

    assert exc_info.value.platform == "instagram"
    assert repository.created == []


@pytest.mark.asyncio
async def test_unparseable_completion_is_stored_as_is(configuration_store, repository, invoker_factory):
    client = FakeCompletionClient(default="The model ignored the format entirely.")
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory)

    result = await pipeline.generate(request_for("youtube"))

    assert result.prompts[0].script_result == ""
    assert result.prompts[0].content_analysis == []
    assert result.prompts[0].viral_score == 0
    assert result.average_viral_score == 0


@pytest.mark.asyncio
async def test_existing_prompt_is_reused_without_invocation(configuration_store, repository, invoker_factory):
    existing = repository.add(StoredPrompt(
        user_id="user-1",
        platform="youtube",
        prompt_text="dicas de marketing",
        script_result="Roteiro salvo",
        viral_score=64
    ))
    client = FakeCompletionClient()
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory)

    result = await pipeline.generate(request_for("youtube", "instagram"))

    assert result.is_existing is True
    assert result.first_prompt_id == existing.id
    assert result.average_viral_score == 64
    assert client.calls == []
    assert configuration_store.reads == 0


@pytest.mark.asyncio
async def test_hidden_or_foreign_prompts_are_not_reused(configuration_store, repository, invoker_factory):
    repository.add(StoredPrompt(user_id="user-1", platform="youtube", prompt_text="dicas de marketing", hidden=True))
    repository.add(StoredPrompt(user_id="user-2", platform="youtube", prompt_text="dicas de marketing"))
    client = FakeCompletionClient()
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory)

    result = await pipeline.generate(request_for("youtube"))

    assert result.is_existing is False
    assert client.calls == ["youtube"]


@pytest.mark.asyncio
async def test_reuse_can_be_disabled(configuration_store, repository, invoker_factory):
    repository.add(StoredPrompt(user_id="user-1", platform="youtube", prompt_text="dicas de marketing"))
    client = FakeCompletionClient()
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory, reuse_existing=False)

    result = await pipeline.generate(request_for("youtube"))

    assert result.is_existing is False
    assert client.calls == ["youtube"]


@pytest.mark.asyncio
async def test_reuse_lookup_failure_does_not_block_generation(configuration_store, invoker_factory):
    class FailingLookupRepository(InMemoryPromptRepository):
        async def find_existing(self, user_id, platform, prompt_text):
            raise PersistenceError("lookup failed", table="prompts", operation="read")

    repository = FailingLookupRepository()
    client = FakeCompletionClient()
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory)

    result = await pipeline.generate(request_for("youtube"))

    assert len(result.prompts) == 1


@pytest.mark.asyncio
async def test_platform_format_and_context_reach_the_provider(configuration_store, repository, invoker_factory):
    client = FakeCompletionClient()
    format_store = FakePlatformFormatStore({"newsletter": "NEWSLETTER FORMAT"})
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory, format_store=format_store)
    sample = ContextSample(title="Antigo", body="Roteiro antigo", aggregate_score=90)

    await pipeline.generate(request_for("Newsletter", context_sample=sample))

    user_message = client.messages[0][1].content
    assert "Platform format: NEWSLETTER FORMAT" in user_message
    assert '"viralScore": 90' in user_message
    assert format_store.lookups == ["newsletter"]


@pytest.mark.asyncio
async def test_run_batch_does_not_store(configuration_store, repository, invoker_factory):
    client = FakeCompletionClient()
    pipeline = make_pipeline(configuration_store, client, repository, invoker_factory)

    results = await pipeline.run_batch(request_for("youtube", "twitter"))

    assert [r.platform for r in results] == ["youtube", "twitter"]
    assert all(r.content.aggregate_score == 82 for r in results)
    assert repository.created == []


@pytest.mark.parametrize("scores, expected", [
    ([], 0),
    ([80], 80),
    ([80, 71], 76),
    ([80, 81], 81),
    ([0, 0, 1], 0),
])
def test_average_score_rounds_half_up(scores, expected):
    assert average_score(scores) == expected
