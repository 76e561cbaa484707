"""
Pytest configuration and fixtures for AI Gateway tests.
"""

import io
import os
import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing the app
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["GOOGLE_AI_API_KEY"] = "test-gemini-key"
os.environ["CLAUDE_API_KEY"] = "test-claude-key"
os.environ["PROVIDER_MAX_RETRIES"] = "2"
os.environ["PROVIDER_RETRY_WAIT"] = "0"

import fitz  # PyMuPDF
import pandas as pd
from PIL import Image

from api_server import app
from ai_gateway.core.config import ProviderConfig
from ai_gateway.core.exceptions import ProviderError


class FakeLLM:
    """Text model double that records prompts and replays canned answers."""

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return "ok"


class FakeVisionProvider:
    """Vision provider double for detection and field extraction."""

    def __init__(self, result="detected", error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def analyze(self, image_base64, items, action=None, mime_type="image/jpeg"):
        self.calls.append({"image": image_base64, "items": items, "action": action, "mime_type": mime_type})
        if self.error is not None:
            raise self.error
        return self.result

    async def ask(self, image_base64, prompt, mime_type="image/jpeg"):
        self.calls.append({"image": image_base64, "prompt": prompt, "mime_type": mime_type})
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def provider_config():
    """Provider configuration with retries that never sleep."""
    return ProviderConfig(
        api_key="test-key",
        model="test-model",
        base_url="https://provider.test/v1",
        timeout=5.0,
        max_retries=2,
        retry_wait=0
    )


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def make_llm():
    """Factory for text model doubles with canned answers."""
    return FakeLLM


@pytest.fixture
def make_vision():
    """Factory for vision provider doubles."""
    return FakeVisionProvider


@pytest.fixture
def failing_llm():
    return FakeLLM(error=ProviderError("upstream exploded"))


@pytest.fixture
def png_bytes():
    """A small PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


def build_glossary_xlsx(rows, columns=17):
    """Build glossary spreadsheet bytes; rows map 1-based column numbers to cell text."""
    headers = [f"Column{i}" for i in range(1, columns + 1)]
    data = [[row.get(i, "") for i in range(1, columns + 1)] for row in rows]
    buffer = io.BytesIO()
    pd.DataFrame(data, columns=headers).to_excel(buffer, index=False)
    return buffer.getvalue()


@pytest.fixture
def make_glossary():
    return build_glossary_xlsx


@pytest.fixture
def glossary_xlsx():
    """Glossary with Spanish translations in column 17."""
    return build_glossary_xlsx([
        {1: "A&E", 17: "Arquitectura e Ingeniería"},
        {1: "apple", 17: "manzana"},
    ])


def build_pdf(pages):
    """Build PDF bytes with one page per text entry."""
    document = fitz.open()
    for text in pages:
        page = document.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = document.tobytes()
    document.close()
    return data


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def sample_pdf():
    return build_pdf(["The warranty period is two years from delivery."])
