"""
In-memory stand-ins for the Foundry project client and the OpenAI client it hands out.
"""

from types import SimpleNamespace

import pytest


class FakeAgents:
    def __init__(self, calls, fail_create=None, fail_delete=None):
        self.calls = calls
        self.fail_create = fail_create
        self.fail_delete = fail_delete
        self.versions = 0

    async def create_version(self, agent_name, definition):
        self.calls.append(("agents.create_version", agent_name))
        if self.fail_create:
            raise self.fail_create
        self.versions += 1
        self.definition = definition
        return SimpleNamespace(name=agent_name, version=str(self.versions), id=f"{agent_name}:{self.versions}")

    async def delete_version(self, agent_name, agent_version):
        self.calls.append(("agents.delete_version", agent_name, agent_version))
        if self.fail_delete:
            raise self.fail_delete


class FakeConversations:
    def __init__(self, calls, fail_create=None, fail_delete=None):
        self.calls = calls
        self.fail_create = fail_create
        self.fail_delete = fail_delete

    async def create(self):
        self.calls.append(("conversations.create",))
        if self.fail_create:
            raise self.fail_create
        return SimpleNamespace(id="conv_123")

    async def delete(self, conversation_id):
        self.calls.append(("conversations.delete", conversation_id))
        if self.fail_delete:
            raise self.fail_delete


class FakeResponses:
    def __init__(self, calls, response=None, fail=None):
        self.calls = calls
        self.response = response
        self.fail = fail
        self.kwargs = None

    async def create(self, **kwargs):
        self.calls.append(("responses.create", kwargs["conversation"]))
        self.kwargs = kwargs
        if self.fail:
            raise self.fail
        return self.response


class FakeOpenAIClient:
    def __init__(self, calls, conversations, responses, fail_close=None):
        self.calls = calls
        self.conversations = conversations
        self.responses = responses
        self.fail_close = fail_close
        self.closed = False

    async def close(self):
        if self.fail_close:
            raise self.fail_close
        self.closed = True


class FakeProject:
    def __init__(self, calls, agents, openai_client):
        self.calls = calls
        self.agents = agents
        self.openai_client = openai_client

    def get_openai_client(self):
        self.calls.append(("project.get_openai_client",))
        return self.openai_client


def make_response(output=None, output_text="Total annual sales: 660500", usage=True):
    return SimpleNamespace(
        id="resp_1",
        model="gpt-4.1-mini",
        output_text=output_text,
        output=output if output is not None else [],
        usage=SimpleNamespace(input_tokens=812, output_tokens=340) if usage else None,
    )


def code_interpreter_call(code="import pandas as pd\nprint(df.sum())", outputs=None):
    return SimpleNamespace(
        type="code_interpreter_call",
        id="ci_1",
        container_id="cntr_1",
        code=code,
        outputs=outputs,
    )


@pytest.fixture
def calls():
    return []


@pytest.fixture
def make_project(calls):
    """Build a fake project client; keyword arguments inject failures or the response to return."""

    def _make(
        response=None,
        fail_agent_create=None,
        fail_agent_delete=None,
        fail_conversation_create=None,
        fail_conversation_delete=None,
        fail_response=None,
        fail_close=None,
    ):
        agents = FakeAgents(calls, fail_create=fail_agent_create, fail_delete=fail_agent_delete)
        conversations = FakeConversations(
            calls, fail_create=fail_conversation_create, fail_delete=fail_conversation_delete
        )
        responses = FakeResponses(calls, response=response or make_response(), fail=fail_response)
        return FakeProject(calls, agents, FakeOpenAIClient(calls, conversations, responses, fail_close=fail_close))

    return _make


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with none of the demo's variables set."""
    for name in ("AZURE_FOUNDRY_PROJECT_ENDPOINT", "AZURE_FOUNDRY_GPT_MODEL", "FOUNDRY_AGENT_NAME", "SALES_DATA_FILE"):
        # setenv first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
