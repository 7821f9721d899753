# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that flows
# between the MCP layer and the watsonx.ai service.  They carry almost no
# behavior: a descriptor, a result envelope, and one request type per tool.
#
# THE REQUEST VARIANTS:
#   Each tool gets its own frozen dataclass (GenerateRequest, ChatRequest, ...)
#   built from the raw MCP argument map by `from_arguments()`.  That is the
#   ONLY place defaults are applied.  The dispatcher never reads raw
#   arguments; it reads these.
#
# FALSY DEFAULTS:
#   Numeric parameters use `arguments.get(x) or DEFAULT`.  An explicit 0 (or
#   0.0 temperature) is treated the same as "not given" and becomes the
#   default.  Existing MCP clients of this server rely on that, so keep it.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional


# -----------------------------------------------------------------------------
# Catalog defaults
# -----------------------------------------------------------------------------
DEFAULT_CHAT_MODEL = "ibm/granite-13b-chat-v2"
DEFAULT_EMBEDDING_MODEL = "ibm/slate-125m-english-rtrvr"

DEFAULT_MAX_NEW_TOKENS = 500
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 1.0
DEFAULT_TOP_K = 50

MODEL_LIST_LIMIT = 100
CHAT_STOP_SEQUENCES = ("User:", "System:")


# -----------------------------------------------------------------------------
# ToolDescriptor - one entry of the tool catalog
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """A named, schema-described operation that an agent can call."""

    name: str                          # Stable external identifier
    description: str                   # What the LLM reads to decide WHEN to call it
    input_schema: dict[str, Any]       # JSON schema of the accepted arguments

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))

    @property
    def properties(self) -> dict[str, Any]:
        return dict(self.input_schema.get("properties", {}))

    def to_dict(self) -> dict[str, Any]:
        """Render the MCP wire shape (note the camelCase `inputSchema`)."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# -----------------------------------------------------------------------------
# ToolCallRequest / ToolResult - what goes in, what comes out
# -----------------------------------------------------------------------------
@dataclass
class ToolCallRequest:
    """One inbound tool call.  Arguments are untyped at the boundary."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TextContent:
    """A plain-text content block."""

    text: str
    type: str = "text"


@dataclass
class ToolResult:
    """The uniform output envelope for every tool, success OR failure.

    Failures are not a separate channel: they are a single text block
    describing the problem.  Callers pattern-match on the text.
    """

    content: list[TextContent] = field(default_factory=list)

    @classmethod
    def text(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(text=message)])

    @property
    def first_text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        return {"content": [{"type": c.type, "text": c.text} for c in self.content]}


# =============================================================================
# Request variants (one per tool)
# =============================================================================
# `tool_name` is the external MCP name.  REQUEST_TYPES at the bottom of the
# file is the closed set the dispatcher switches over.
# =============================================================================

@dataclass(frozen=True)
class GenerateRequest:
    """Plain text generation from a single prompt."""

    tool_name: ClassVar[str] = "watsonx_generate"

    prompt: Any
    model_id: str = DEFAULT_CHAT_MODEL
    max_new_tokens: Any = DEFAULT_MAX_NEW_TOKENS
    temperature: Any = DEFAULT_TEMPERATURE
    top_p: Any = DEFAULT_TOP_P
    top_k: Any = DEFAULT_TOP_K

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "GenerateRequest":
        return cls(
            prompt=arguments.get("prompt"),
            model_id=arguments.get("model_id") or DEFAULT_CHAT_MODEL,
            max_new_tokens=arguments.get("max_new_tokens") or DEFAULT_MAX_NEW_TOKENS,
            temperature=arguments.get("temperature") or DEFAULT_TEMPERATURE,
            top_p=arguments.get("top_p") or DEFAULT_TOP_P,
            top_k=arguments.get("top_k") or DEFAULT_TOP_K,
        )

    def parameters(self) -> dict[str, Any]:
        return {
            "max_new_tokens": self.max_new_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "top_k": self.top_k,
        }


@dataclass(frozen=True)
class ListModelsRequest:
    """List the foundation models available on the service."""

    tool_name: ClassVar[str] = "watsonx_list_models"

    limit: int = MODEL_LIST_LIMIT

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "ListModelsRequest":
        # The limit is fixed; nothing in the argument map is read.
        return cls()


@dataclass(frozen=True)
class EmbeddingsRequest:
    """Embed a batch of texts."""

    tool_name: ClassVar[str] = "watsonx_embeddings"

    texts: Any
    model_id: str = DEFAULT_EMBEDDING_MODEL

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "EmbeddingsRequest":
        return cls(
            texts=arguments.get("texts"),
            model_id=arguments.get("model_id") or DEFAULT_EMBEDDING_MODEL,
        )


@dataclass(frozen=True)
class ChatMessage:
    role: Optional[str]
    content: Any

    # "System: ...", "User: ...", "Assistant: ..."; unknown roles render bare.
    _PREFIXES: ClassVar[dict[str, str]] = {
        "system": "System",
        "user": "User",
        "assistant": "Assistant",
    }

    @classmethod
    def from_dict(cls, message: dict[str, Any]) -> "ChatMessage":
        return cls(role=message.get("role"), content=message.get("content"))

    def render(self) -> str:
        # Missing content renders as an empty string, never "None".
        content = "" if self.content is None else f"{self.content}"
        prefix = self._PREFIXES.get(self.role or "")
        if prefix is None:
            return content
        return f"{prefix}: {content}"


@dataclass(frozen=True)
class ChatRequest:
    """A conversation flattened into a single completion prompt."""

    tool_name: ClassVar[str] = "watsonx_chat"

    messages: tuple[ChatMessage, ...]
    model_id: str = DEFAULT_CHAT_MODEL
    max_new_tokens: Any = DEFAULT_MAX_NEW_TOKENS
    temperature: Any = DEFAULT_TEMPERATURE

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "ChatRequest":
        # A missing `messages` raises TypeError here, which the dispatcher
        # reports like any other upstream failure.
        messages = tuple(ChatMessage.from_dict(m) for m in arguments.get("messages"))
        return cls(
            messages=messages,
            model_id=arguments.get("model_id") or DEFAULT_CHAT_MODEL,
            max_new_tokens=arguments.get("max_new_tokens") or DEFAULT_MAX_NEW_TOKENS,
            temperature=arguments.get("temperature") or DEFAULT_TEMPERATURE,
        )

    def prompt(self) -> str:
        """Flatten the conversation and cue the model to answer as Assistant."""
        transcript = "\n\n".join(m.render() for m in self.messages)
        return transcript + "\n\nAssistant:"

    def parameters(self) -> dict[str, Any]:
        return {
            "max_new_tokens": self.max_new_tokens,
            "temperature": self.temperature,
            "stop_sequences": list(CHAT_STOP_SEQUENCES),
        }


REQUEST_TYPES = {
    cls.tool_name: cls
    for cls in (GenerateRequest, ListModelsRequest, EmbeddingsRequest, ChatRequest)
}
