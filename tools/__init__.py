# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the MCP server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and core/.  mcp_server.py:
#     1. Answers tools/list with the catalog from core/catalog.py
#     2. Hands every tools/call, raw, to core.dispatcher.ToolDispatcher
#     3. Converts the ToolResult into MCP text content
#     4. Logs requests and responses to stderr
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate arguments or tool names (the dispatcher answers)
#   - They do NOT build watsonx.ai requests (that's core/dispatcher.py)
#   - They do NOT talk HTTP (that's core/client.py)
# =============================================================================
