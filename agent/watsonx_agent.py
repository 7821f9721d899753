# =============================================================================
# agent/watsonx_agent.py  -  Google ADK agent wired to the watsonx MCP server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds a Google ADK agent whose only tools are the ones served by
#   tools/mcp_server.py, for projects that want to drive watsonx.ai from an
#   ADK runner.
#
#   ┌──────────────────────┐   stdio (MCP)   ┌─────────────────────┐   HTTPS   ┌────────────┐
#   │  ADK Agent (LiteLlm) │ ──────────────▶ │ tools/mcp_server.py │ ────────▶ │ watsonx.ai │
#   └──────────────────────┘                 └─────────────────────┘           └────────────┘
#
#   ADK spawns the server as a subprocess when the agent first needs its
#   tools.  The reasoning model is any LiteLLM model string; LiteLLM reads
#   the matching provider key (e.g. OPENROUTER_API_KEY) from the environment.
# =============================================================================

import os
import sys
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import WATSONX_ASSISTANT_PROMPT


DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def mcp_server_parameters() -> StdioServerParameters:
    """`python -m tools.mcp_server` from the project root, current interpreter.

    The parent environment (WATSONX_* included) is passed through.
    """
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=dict(os.environ),
    )


def create_agent(model: Optional[str] = None) -> Agent:
    """Create the watsonx assistant; `model` falls back to $AGENT_MODEL."""
    model_name = model or os.getenv("AGENT_MODEL") or DEFAULT_AGENT_MODEL
    return Agent(
        name="watsonx_assistant",
        model=LiteLlm(model=model_name),
        instruction=WATSONX_ASSISTANT_PROMPT,
        tools=[MCPToolset(connection_params=mcp_server_parameters())],
    )
