import pytest
from unittest.mock import MagicMock

from gemini_gateway.gateway.config import Settings
from gemini_gateway.gateway.server import create_app


def gemini_response(text):
    """Response shaped like the SDK's `candidates[0].content.parts[0].text`."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@pytest.fixture
def settings():
    return Settings(api_key="test_key", model="gemini-test", max_upload_mb=1)


@pytest.fixture
def generation_service():
    """
    Stub for the Gemini wrapper. `generate` records the payloads it receives.
    """
    service = MagicMock()
    service.model = "gemini-test"
    service.generate.return_value = gemini_response("Hello from Gemini!")
    return service


@pytest.fixture
def app(settings, generation_service):
    app = create_app(settings, generation_service)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
