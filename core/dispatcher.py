# =============================================================================
# core/dispatcher.py  -  Tool Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns one tool call (name + argument map) into one watsonx.ai request,
#   and the answer back into a ToolResult.  It NEVER raises: every failure
#   ends up as a single text block.
#
# THE FLOW:
#   1. No API key configured?  -> fixed "not configured" message, whatever
#      the tool name.
#   2. Look the name up in REQUEST_TYPES -> a request model with defaults
#      applied.  Unknown name -> "Unknown tool: <name>".
#   3. Run the handler for that request type in a worker thread (the client
#      is blocking `requests` code) and shape the response.
#   4. Anything the client raises -> "Error calling watsonx.ai: <message>".
#
# THE CLIENT HANDLE:
#   Built lazily on the first call, at most once, and only when a key is
#   present.  Creation sits behind a lock so two concurrent first calls
#   cannot build two clients.
# =============================================================================

import asyncio
import json
import logging
import threading
from typing import Any, Callable, Optional

from core.client import RestWatsonxClient, WatsonxClient
from core.config import WatsonxSettings
from core.models import (
    REQUEST_TYPES,
    ChatRequest,
    EmbeddingsRequest,
    GenerateRequest,
    ListModelsRequest,
    ToolCallRequest,
    ToolResult,
)


logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "Error: watsonx.ai not configured. Set WATSONX_API_KEY environment variable."
)
UPSTREAM_ERROR_PREFIX = "Error calling watsonx.ai: "


class UnknownToolError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


def parse_tool_call(request: ToolCallRequest):
    """Map a raw tool call onto its request model.

    Raises:
        UnknownToolError: the name is not in the catalog.
    """
    request_type = REQUEST_TYPES.get(request.name)
    if request_type is None:
        raise UnknownToolError(request.name)
    return request_type.from_arguments(request.arguments or {})


def default_client_factory(settings: WatsonxSettings) -> WatsonxClient:
    return RestWatsonxClient(
        api_key=settings.api_key,
        service_url=settings.service_url,
        version=settings.version,
    )


def _first_generated_text(result: Any) -> str:
    """`results[0].generated_text`, or "" if any step of the path is missing."""
    if not isinstance(result, dict):
        return ""
    results = result.get("results")
    if not isinstance(results, list) or not results:
        return ""
    first = results[0]
    if not isinstance(first, dict):
        return ""
    return first.get("generated_text") or ""


class ToolDispatcher:
    """Stateless apart from the lazily created upstream client."""

    def __init__(
        self,
        settings: WatsonxSettings,
        client_factory: Callable[[WatsonxSettings], WatsonxClient] = default_client_factory,
    ) -> None:
        self.settings = settings
        self._client_factory = client_factory
        self._client: Optional[WatsonxClient] = None
        self._client_lock = threading.Lock()

        self._handlers = {
            GenerateRequest: self._generate,
            ListModelsRequest: self._list_models,
            EmbeddingsRequest: self._embeddings,
            ChatRequest: self._chat,
        }

    @classmethod
    def from_env(cls) -> "ToolDispatcher":
        return cls(WatsonxSettings.from_env())

    # ---------- Client handle ----------

    def get_client(self) -> Optional[WatsonxClient]:
        """Return the shared client, creating it on first use.

        Returns None, permanently, when no API key is configured.
        """
        if self._client is None and self.settings.is_configured:
            with self._client_lock:
                if self._client is None:
                    self._client = self._client_factory(self.settings)
                    logger.info("watsonx.ai client created for %s", self.settings.service_url)
        return self._client

    # ---------- Entry point ----------

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        client = self.get_client()
        if client is None:
            return ToolResult.text(NOT_CONFIGURED_MESSAGE)

        request = ToolCallRequest(name=name, arguments=arguments or {})
        try:
            tool_request = parse_tool_call(request)
            handler = self._handlers[type(tool_request)]
            text = await asyncio.to_thread(handler, client, tool_request)
        except UnknownToolError as exc:
            logger.warning("Rejected call to unknown tool %r", exc.name)
            return ToolResult.text(str(exc))
        except Exception as exc:
            logger.warning("%s failed: %s", name, exc)
            return ToolResult.text(f"{UPSTREAM_ERROR_PREFIX}{_error_text(exc)}")

        return ToolResult.text(text)

    # ---------- Request shaping ----------

    def _with_project(self, params: dict[str, Any]) -> dict[str, Any]:
        # Omitted entirely (not null, not "") when no project is configured.
        if self.settings.project_id:
            params["project_id"] = self.settings.project_id
        return params

    def _generate(self, client: WatsonxClient, request: GenerateRequest) -> str:
        params = self._with_project({
            "input": request.prompt,
            "model_id": request.model_id,
            "parameters": request.parameters(),
        })
        result = client.generate_text(params)
        return _first_generated_text(result)

    def _list_models(self, client: WatsonxClient, request: ListModelsRequest) -> str:
        result = client.list_foundation_model_specs(limit=request.limit)
        resources = (result or {}).get("resources") or []
        models = [
            {
                "id": m.get("model_id"),
                "name": m.get("label"),
                "provider": m.get("provider"),
                "tasks": m.get("tasks"),
            }
            for m in resources
        ]
        return json.dumps(models, indent=2, ensure_ascii=False)

    def _embeddings(self, client: WatsonxClient, request: EmbeddingsRequest) -> str:
        params = self._with_project({
            "inputs": request.texts,
            "model_id": request.model_id,
        })
        result = client.embed_text(params)
        return json.dumps(result, indent=2, ensure_ascii=False)

    def _chat(self, client: WatsonxClient, request: ChatRequest) -> str:
        params = self._with_project({
            "input": request.prompt(),
            "model_id": request.model_id,
            "parameters": request.parameters(),
        })
        result = client.generate_text(params)
        return _first_generated_text(result).strip()


def _error_text(exc: Exception) -> str:
    # Prefer an explicit `.message` (WatsonxAPIError, some SDK errors).
    message = getattr(exc, "message", None)
    if isinstance(message, str):
        return message
    return str(exc)
