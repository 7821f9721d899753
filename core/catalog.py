# =============================================================================
# core/catalog.py  -  The Tool Catalog
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares the four tools this server offers, with the JSON schema the
#   calling agent sees.  The catalog is static: it is built once at import
#   and never changes for the lifetime of the process.
#
# WHERE THE DEFAULTS LIVE:
#   The schema defaults below are the same constants the request models in
#   core/models.py fall back to.  The schema only *advertises* them; the
#   request models are what actually apply them.
# =============================================================================

from core.models import (
    ChatRequest,
    DEFAULT_CHAT_MODEL,
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_MAX_NEW_TOKENS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    DEFAULT_TOP_P,
    EmbeddingsRequest,
    GenerateRequest,
    ListModelsRequest,
    ToolDescriptor,
)


GENERATE_TOOL = ToolDescriptor(
    name=GenerateRequest.tool_name,
    description=(
        "Generate text using IBM watsonx.ai foundation models "
        "(Granite, Llama, Mistral, etc.)"
    ),
    input_schema={
        "type": "object",
        "properties": {
            "prompt": {
                "type": "string",
                "description": "The prompt to send to the model",
            },
            "model_id": {
                "type": "string",
                "description": (
                    "Model ID (e.g., 'ibm/granite-13b-chat-v2', "
                    "'meta-llama/llama-3-70b-instruct')"
                ),
                "default": DEFAULT_CHAT_MODEL,
            },
            "max_new_tokens": {
                "type": "number",
                "description": "Maximum number of tokens to generate",
                "default": DEFAULT_MAX_NEW_TOKENS,
            },
            "temperature": {
                "type": "number",
                "description": "Temperature for sampling (0-2)",
                "default": DEFAULT_TEMPERATURE,
            },
            "top_p": {
                "type": "number",
                "description": "Top-p nucleus sampling",
                "default": DEFAULT_TOP_P,
            },
            "top_k": {
                "type": "number",
                "description": "Top-k sampling",
                "default": DEFAULT_TOP_K,
            },
        },
        "required": ["prompt"],
    },
)

LIST_MODELS_TOOL = ToolDescriptor(
    name=ListModelsRequest.tool_name,
    description="List available foundation models in watsonx.ai",
    input_schema={
        "type": "object",
        "properties": {},
    },
)

EMBEDDINGS_TOOL = ToolDescriptor(
    name=EmbeddingsRequest.tool_name,
    description="Generate text embeddings using watsonx.ai embedding models",
    input_schema={
        "type": "object",
        "properties": {
            "texts": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Array of texts to embed",
            },
            "model_id": {
                "type": "string",
                "description": "Embedding model ID",
                "default": DEFAULT_EMBEDDING_MODEL,
            },
        },
        "required": ["texts"],
    },
)

CHAT_TOOL = ToolDescriptor(
    name=ChatRequest.tool_name,
    description="Have a conversation with watsonx.ai chat models",
    input_schema={
        "type": "object",
        "properties": {
            "messages": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "role": {
                            "type": "string",
                            "enum": ["system", "user", "assistant"],
                        },
                        "content": {"type": "string"},
                    },
                },
                "description": "Array of chat messages",
            },
            "model_id": {
                "type": "string",
                "description": "Chat model ID",
                "default": DEFAULT_CHAT_MODEL,
            },
            "max_new_tokens": {
                "type": "number",
                "default": DEFAULT_MAX_NEW_TOKENS,
            },
            "temperature": {
                "type": "number",
                "default": DEFAULT_TEMPERATURE,
            },
        },
        "required": ["messages"],
    },
)


_CATALOG: tuple[ToolDescriptor, ...] = (
    GENERATE_TOOL,
    LIST_MODELS_TOOL,
    EMBEDDINGS_TOOL,
    CHAT_TOOL,
)


def list_tools() -> list[ToolDescriptor]:
    """Return every tool this server offers, in a stable order."""
    return list(_CATALOG)


def get_tool(name: str) -> ToolDescriptor | None:
    for tool in _CATALOG:
        if tool.name == name:
            return tool
    return None
