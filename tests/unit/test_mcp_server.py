import asyncio
import logging

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from conftest import FakeWatsonxClient
from core.catalog import list_tools
from core.client import WatsonxAPIError
from core.config import WatsonxSettings
from core.dispatcher import NOT_CONFIGURED_MESSAGE, ToolDispatcher
from tools import mcp_server


def _use_dispatcher(monkeypatch, client, api_key="test-key", project_id=None):
    dispatcher = ToolDispatcher(
        WatsonxSettings(api_key=api_key, project_id=project_id),
        client_factory=lambda _settings: client,
    )
    monkeypatch.setattr(mcp_server, "dispatcher", dispatcher)
    return dispatcher


async def _list_tools():
    async with create_connected_server_and_client_session(mcp_server.server) as session:
        return (await session.list_tools()).tools


async def _call_tool(name, arguments):
    async with create_connected_server_and_client_session(mcp_server.server) as session:
        result = await session.call_tool(name, arguments)
        return result.isError, [block.text for block in result.content]


def call(name, arguments):
    return asyncio.run(_call_tool(name, arguments))


# ---------- tools/list ----------

@pytest.mark.unit
def test_server_advertises_catalog_schemas_verbatim():
    advertised = {tool.name: tool for tool in asyncio.run(_list_tools())}
    assert list(advertised) == [d.name for d in list_tools()]

    for descriptor in list_tools():
        tool = advertised[descriptor.name]
        assert tool.description == descriptor.description
        assert tool.inputSchema == descriptor.input_schema


# ---------- startup ----------

@pytest.mark.unit
def test_server_identity_and_quiet_sdk_loggers():
    options = mcp_server.server.create_initialization_options()
    assert options.server_name == "watsonx-mcp-server"
    assert options.server_version == "1.0.0"
    assert logging.getLogger("mcp").level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


# ---------- not configured ----------

@pytest.mark.unit
@pytest.mark.parametrize("name, arguments", [
    ("watsonx_generate", {}),
    ("watsonx_embeddings", {"texts": "oops"}),
    ("watsonx_chat", {"messages": 42}),
    ("nope", {}),
])
def test_not_configured_wins_over_everything(monkeypatch, name, arguments):
    _use_dispatcher(monkeypatch, FakeWatsonxClient(), api_key=None)
    assert call(name, arguments) == (False, [NOT_CONFIGURED_MESSAGE])


# ---------- unknown tool ----------

@pytest.mark.unit
def test_unknown_tool_is_a_normal_result(monkeypatch):
    client = FakeWatsonxClient()
    _use_dispatcher(monkeypatch, client)

    assert call("nope", {}) == (False, ["Unknown tool: nope"])
    assert client.calls == []


# ---------- argument problems reach the dispatcher ----------

@pytest.mark.unit
def test_chat_without_messages_reports_error_text(monkeypatch):
    client = FakeWatsonxClient()
    _use_dispatcher(monkeypatch, client)

    is_error, texts = call("watsonx_chat", {})

    assert is_error is False
    assert len(texts) == 1
    assert texts[0].startswith("Error calling watsonx.ai: ")
    assert client.calls == []


@pytest.mark.unit
def test_generate_without_prompt_is_forwarded_unvalidated(monkeypatch):
    client = FakeWatsonxClient(generate_result={"results": []})
    _use_dispatcher(monkeypatch, client)

    assert call("watsonx_generate", {}) == (False, [""])
    assert client.calls[0][1]["input"] is None


# ---------- happy paths ----------

@pytest.mark.unit
def test_generate_over_mcp_applies_defaults(monkeypatch):
    client = FakeWatsonxClient(generate_result={"results": [{"generated_text": "A poem"}]})
    _use_dispatcher(monkeypatch, client, project_id="proj-9")

    assert call("watsonx_generate", {"prompt": "Write a poem", "temperature": 0}) == (False, ["A poem"])

    method, params = client.calls[0]
    assert method == "generate_text"
    assert params == {
        "input": "Write a poem",
        "model_id": "ibm/granite-13b-chat-v2",
        "parameters": {
            "max_new_tokens": 500,
            "temperature": 0.7,
            "top_p": 1.0,
            "top_k": 50,
        },
        "project_id": "proj-9",
    }


@pytest.mark.unit
def test_integer_parameters_pass_through_unchanged(monkeypatch):
    client = FakeWatsonxClient()
    _use_dispatcher(monkeypatch, client)

    call("watsonx_generate", {"prompt": "x", "max_new_tokens": 42})

    sent = client.calls[0][1]["parameters"]["max_new_tokens"]
    assert sent == 42
    assert isinstance(sent, int)


@pytest.mark.unit
def test_chat_over_mcp(monkeypatch):
    client = FakeWatsonxClient(generate_result={"results": [{"generated_text": " Hi! "}]})
    _use_dispatcher(monkeypatch, client)

    assert call("watsonx_chat", {"messages": [{"role": "user", "content": "Hi"}]}) == (False, ["Hi!"])
    assert client.calls[0][1]["input"] == "User: Hi\n\nAssistant:"


@pytest.mark.unit
def test_list_models_over_mcp(monkeypatch):
    _use_dispatcher(monkeypatch, FakeWatsonxClient(models_result={"resources": []}))
    assert call("watsonx_list_models", {}) == (False, ["[]"])


# ---------- upstream failure ----------

@pytest.mark.unit
def test_upstream_error_text_over_mcp(monkeypatch):
    client = FakeWatsonxClient(error=WatsonxAPIError("Model 'x' is not supported", status_code=404))
    _use_dispatcher(monkeypatch, client)

    assert call("watsonx_embeddings", {"texts": ["a"], "model_id": "x"}) == (
        False,
        ["Error calling watsonx.ai: Model 'x' is not supported"],
    )
