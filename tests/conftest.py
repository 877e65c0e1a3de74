"""
Shared fixtures for Viral Studio tests.

Every collaborator port has an in-memory fake here so no test touches
the network.
"""

import asyncio
import itertools
import json
import os
import re
import sys
from datetime import datetime, timezone

import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from viral_studio.core.models.content import ParsedContent, StoredPrompt
from viral_studio.core.models.errors import AuthenticationError
from viral_studio.core.models.llm import LLMResponse
from viral_studio.core.ports import (
    CompletionClient,
    ConfigurationStore,
    IdentityProvider,
    PlatformFormatStore,
    PromptRepository
)
from viral_studio.integrations.llm import GenerationInvoker, RetryHandler
from viral_studio.utils.config import get_config
from viral_studio.utils.services import ServiceContainer


VALID_COMPLETION = """Aqui está o seu conteúdo.

## script results start ##
[Hook] Você sabia que *90%* das startups falham no primeiro ano?
[Introduction] Hoje vamos falar sobre como evitar isso.
## script results ends ##

## content analyses start ##
- Potencial de Engajamento (Pontuação: 8/10): Pergunta forte no início
- Eficácia do Gancho (Pontuação: 9/10): Estatística surpreendente
## content analyses ends ##

## viral score start ##
Pontuação Viral: 82
## viral score ends ##"""

ACTIVE_SETTINGS = {
    "temperature": 0.7,
    "max_tokens": 2000,
    "top_p": 1,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}


def active_row(**overrides):
    row = {
        "id": 1,
        "model_type": "gpt-4o-mini",
        "is_active": True,
        "settings": json.dumps(ACTIVE_SETTINGS),
    }
    row.update(overrides)
    return row


def completion_with_score(score, script="Roteiro"):
    return (
        f"## script results start ##\n{script}\n## script results ends ##\n"
        "## content analyses start ##\n- Gancho (Pontuação: 7/10): bom\n## content analyses ends ##\n"
        f"## viral score start ##\nPontuação Viral: {score}\n## viral score ends ##"
    )


class FakeConfigurationStore(ConfigurationStore):

    def __init__(self, row=None):
        self.row = row
        self.reads = 0

    async def fetch_active_model_row(self):
        self.reads += 1
        return self.row


class FakePlatformFormatStore(PlatformFormatStore):

    def __init__(self, templates=None):
        self.templates = templates or {}
        self.lookups = []

    async def get_template(self, platform_id):
        self.lookups.append(platform_id)
        return self.templates.get(platform_id)


class InMemoryPromptRepository(PromptRepository):

    def __init__(self):
        self.rows = {}
        self.created = []
        self.updates = []
        self._ids = itertools.count(1)

    def add(self, prompt: StoredPrompt) -> StoredPrompt:
        stored = prompt.model_copy(update={
            "id": prompt.id or f"prompt-{next(self._ids)}",
            "created_at": datetime.now(timezone.utc)
        })
        self.rows[stored.id] = stored
        return stored

    async def create_prompt(self, prompt):
        stored = self.add(prompt)
        self.created.append(stored)
        return stored

    async def get_prompt(self, record_id, user_id):
        row = self.rows.get(record_id)
        if row is None or row.user_id != user_id or row.hidden:
            return None
        return row

    async def update_prompt(self, record_id, content: ParsedContent):
        self.updates.append((record_id, content))
        updated = self.rows[record_id].model_copy(update={
            "script_result": content.script_body,
            "content_analysis": list(content.analysis_items),
            "viral_score": content.aggregate_score,
            "updated_at": datetime.now(timezone.utc)
        })
        self.rows[record_id] = updated
        return updated

    async def find_existing(self, user_id, platform, prompt_text):
        for row in self.rows.values():
            if (row.user_id, row.platform, row.prompt_text, row.hidden) == (user_id, platform, prompt_text, False):
                return row
        return None


class FakeIdentityProvider(IdentityProvider):

    def __init__(self, tokens=None):
        self.tokens = tokens or {}

    def get_current_identity(self, access_token):
        if access_token not in self.tokens:
            raise AuthenticationError("Invalid or expired access token")
        return self.tokens[access_token]


GENERATION_PLATFORM = re.compile(r'" for (?P<platform>[\w-]+)\.')
REFINEMENT_PLATFORM = re.compile(r'^Platform: (?P<platform>[\w-]+)$', re.MULTILINE)


def platform_of(messages):
    """Recover the platform a message pair was built for."""
    user_content = messages[-1].content
    match = GENERATION_PLATFORM.search(user_content) or REFINEMENT_PLATFORM.search(user_content)
    return match.group("platform") if match else None


class FakeCompletionClient(CompletionClient):
    """
    Scripted completion client.

    ``responses`` maps platform to completion text, or to a list consumed
    one call at a time. ``errors`` maps platform to an exception, or to a
    list of exceptions raised before the response is returned.
    """

    def __init__(self, responses=None, default=VALID_COMPLETION, errors=None, delays=None):
        self.responses = responses or {}
        self.default = default
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls = []
        self.messages = []
        self.configurations = []

    async def complete(self, messages, configuration):
        platform = platform_of(messages)
        self.calls.append(platform)
        self.messages.append(messages)
        self.configurations.append(configuration)

        await asyncio.sleep(self.delays.get(platform, 0))

        error = self.errors.get(platform)
        if isinstance(error, list):
            if error:
                raise error.pop(0)
        elif error is not None:
            raise error

        response = self.responses.get(platform, self.default)
        if isinstance(response, list):
            response = response.pop(0)

        return LLMResponse(content=response, model=configuration.model_name)


@pytest.fixture
def configuration_store():
    return FakeConfigurationStore(active_row())


@pytest.fixture
def format_store():
    return FakePlatformFormatStore()


@pytest.fixture
def repository():
    return InMemoryPromptRepository()


@pytest.fixture
def completion_client():
    return FakeCompletionClient()


@pytest.fixture
def retry_handler():
    return RetryHandler(max_retries=2, base_delay=0, jitter=False)


@pytest.fixture
def invoker(completion_client, retry_handler):
    return GenerationInvoker(completion_client, retry_handler=retry_handler)


@pytest.fixture
def services(configuration_store, format_store, repository, completion_client):
    config = get_config('testing')
    config.LLM_RETRY_DELAY = 0
    return ServiceContainer(
        configuration_store=configuration_store,
        platform_format_store=format_store,
        prompt_repository=repository,
        identity_provider=FakeIdentityProvider({"good-token": "user-1", "other-token": "user-2"}),
        completion_client=completion_client,
        config=config
    )


@pytest.fixture
def app(services):
    from viral_studio.api.app import create_app
    return create_app(services=services)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer good-token"}
