"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add src/ to sys.path for imports
SRC_ROOT = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_ROOT))

from common.config import Config  # noqa: E402
from gateway.gateway_server import create_app  # noqa: E402
from generation.generation_adapter import GenerationAdapter  # noqa: E402


TEST_SECRET = "test-shared-secret"


class StubBackend:
    """Returns fixed text (or raises) and records every request it sees."""

    def __init__(self, text="Revenue was $5M", error=None):
        self.text = text
        self.error = error
        self.requests = []

    def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def cfg():
    return Config(
        PROJECT="test-project",
        REGION="us-central1",
        MODEL_NAME="gemini-2.0-flash",
        RAG_CORPUS="projects/test-project/locations/us-central1/ragCorpora/42",
        VERTEX_CF_AUTH_TOKEN=TEST_SECRET,
    )


@pytest.fixture
def backend():
    return StubBackend()


@pytest.fixture
def client(cfg, backend):
    app = create_app(cfg, GenerationAdapter(cfg, backend=backend))
    return TestClient(app)
