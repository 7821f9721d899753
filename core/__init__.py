# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the logic of the watsonx MCP server:
#
#   models.py      - descriptors, result envelope, one request type per tool
#   catalog.py     - the four tools and their input schemas
#   config.py      - settings from the environment
#   client.py      - the watsonx.ai REST client (IAM auth + three endpoints)
#   dispatcher.py  - tool call -> watsonx.ai request -> ToolResult
#
# RULE:
#   Nothing in this package imports the MCP SDK or Google ADK.  The MCP server
#   in tools/ and the agent in agent/ are wiring around it.
# =============================================================================
