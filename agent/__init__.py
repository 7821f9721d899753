# =============================================================================
# agent/__init__.py
# =============================================================================
# A Google ADK agent wired to the watsonx MCP server.
#
# This package is a client of the server, not part of it:
#   - prompt.py         tells the LLM what the four watsonx tools are for
#   - watsonx_agent.py  builds the ADK Agent and its MCP stdio connection
#
# The server itself (tools/ + core/) never imports anything from here.
# =============================================================================
