# =============================================================================
# tools/mcp_server.py  -  MCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Serves the four watsonx.ai tools over MCP.  There is exactly one handler
#   per MCP request type:
#     - tools/list  -> the static catalog from core/catalog.py
#     - tools/call  -> core.dispatcher.ToolDispatcher, with the RAW name and
#                      arguments
#
# WHY A SINGLE RAW CALL HANDLER:
#   The dispatcher owns every answer, errors included: the "not configured"
#   text comes before anything else, unknown names get "Unknown tool: <name>",
#   and bad arguments end up as "Error calling watsonx.ai: ...".  So the
#   server does no name lookup and no schema validation of its own
#   (`validate_input=False`); a call always comes back as a normal result.
#
# RUNNING THIS SERVER:
#   a) python -m tools.mcp_server
#   b) the `watsonx-mcp-server` console script
#   c) spawned over stdio by any MCP client (see agent/watsonx_agent.py)
# =============================================================================

import asyncio
import json
import logging
import sys
from typing import Any, Optional

from dotenv import load_dotenv
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from core.catalog import list_tools
from core.dispatcher import ToolDispatcher
from core.models import ToolResult

SERVER_NAME = "watsonx-mcp-server"
SERVER_VERSION = "1.0.0"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT.
# Anything printed to stdout would corrupt the MCP JSON stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + arguments)
#     - GREEN for responses
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with arguments)
_GREEN = "\033[32m"    # Responses
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
# The SDK logs every request at INFO; keep stderr to our own lines.
for _noisy in ("mcp", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)

_PREVIEW_CHARS = 200


def _preview(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False, default=str)
    if len(text) <= _PREVIEW_CHARS:
        return text
    return text[:_PREVIEW_CHARS] + "..."


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    """Log an incoming tool call with (truncated) arguments in CYAN."""
    arg_str = ", ".join(f"{k}={_preview(v)}" for k, v in arguments.items())
    logging.info(f"{_CYAN}{tool_name} called with: {arg_str}{_RESET}")


def _log_response(tool_name: str, result: ToolResult) -> list[types.TextContent]:
    """Log a preview of the tool response in GREEN, then convert it for MCP."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {_preview(result.first_text)}{_RESET}")
    return [types.TextContent(type="text", text=block.text) for block in result.content]


# =============================================================================
# Server + dispatcher
# =============================================================================
# Configuration is read ONCE, here, at import.  `.env` is loaded first so a
# local file can provide WATSONX_API_KEY and friends.
# =============================================================================
load_dotenv()

server = Server(SERVER_NAME, version=SERVER_VERSION)
dispatcher = ToolDispatcher.from_env()


@server.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    return [
        types.Tool(
            name=tool.name,
            description=tool.description,
            inputSchema=tool.input_schema,
        )
        for tool in list_tools()
    ]


@server.call_tool(validate_input=False)
async def handle_call_tool(
    name: str, arguments: Optional[dict[str, Any]]
) -> list[types.TextContent]:
    arguments = arguments or {}
    _log_request(name, arguments)
    result = await dispatcher.call_tool(name, arguments)
    return _log_response(name, result)


# =============================================================================
# Server entry point
# =============================================================================
async def serve() -> None:
    async with stdio_server() as (read_stream, write_stream):
        logging.info("watsonx MCP server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()
