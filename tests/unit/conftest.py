import pytest

from core.config import WatsonxSettings
from core.dispatcher import ToolDispatcher


class FakeWatsonxClient:
    """In-memory stand-in for RestWatsonxClient that records every request."""

    def __init__(self, generate_result=None, models_result=None, embed_result=None, error=None):
        self.generate_result = generate_result if generate_result is not None else {
            "results": [{"generated_text": "Hello there"}]
        }
        self.models_result = models_result if models_result is not None else {"resources": []}
        self.embed_result = embed_result if embed_result is not None else {"results": []}
        self.error = error
        self.calls = []

    def _record(self, method, payload):
        self.calls.append((method, payload))
        if self.error is not None:
            raise self.error

    def generate_text(self, params):
        self._record("generate_text", params)
        return self.generate_result

    def list_foundation_model_specs(self, limit):
        self._record("list_foundation_model_specs", {"limit": limit})
        return self.models_result

    def embed_text(self, params):
        self._record("embed_text", params)
        return self.embed_result


@pytest.fixture
def fake_client():
    return FakeWatsonxClient()


@pytest.fixture
def make_dispatcher():
    def _make(client, api_key="test-key", project_id=None):
        settings = WatsonxSettings(api_key=api_key, project_id=project_id)
        return ToolDispatcher(settings, client_factory=lambda _settings: client)

    return _make
