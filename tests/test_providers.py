"""
Tests for the provider bindings.

HTTP providers run against httpx.MockTransport; Rekognition gets an
injected client.
"""

import asyncio
import json

import httpx
import pytest
from botocore.exceptions import ClientError

from ai_gateway.core.config import ProviderConfig
from ai_gateway.core.exceptions import ProviderError
from ai_gateway.providers import (
    ClaudeVisionProvider,
    DetectionAction,
    GeminiVisionProvider,
    OpenAITextProvider,
    OpenAIVisionProvider,
    RekognitionProvider,
    build_image_prompt,
)

IMAGE_B64 = "aGVsbG8="


def openai_reply(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class FakeRekognitionClient:
    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {}
        self.error = error
        self.calls = []

    def detect_labels(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class TestImagePrompts:
    """Tests for the prompt sent with an image."""

    def test_detect_prompt(self):
        prompt = build_image_prompt(DetectionAction.DETECT, ["cat", "dog"])
        assert prompt == "Please analyze this image and detect if the following items are in the image: cat, dog"

    def test_measurements_prompt(self):
        prompt = build_image_prompt(DetectionAction.MEASUREMENTS, ["table"])
        assert "rough measurements" in prompt
        assert "table" in prompt


class TestOpenAIProvider:
    """Tests for the OpenAI chat completion bindings."""

    def test_complete_posts_chat_request(self, provider_config):
        captured = {}

        def handler(request):
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return openai_reply("Bonjour")

        provider = OpenAITextProvider(provider_config, transport=httpx.MockTransport(handler))
        result = asyncio.run(provider.complete("Translate"))

        assert result == "Bonjour"
        assert captured["url"] == "https://provider.test/v1/chat/completions"
        assert captured["auth"] == "Bearer test-key"
        assert captured["body"]["model"] == "test-model"
        assert captured["body"]["messages"] == [{"role": "user", "content": "Translate"}]

    def test_vision_sends_data_url(self, provider_config):
        captured = {}

        def handler(request):
            captured["body"] = json.loads(request.content)
            return openai_reply("a cat is present")

        provider = OpenAIVisionProvider(provider_config, transport=httpx.MockTransport(handler))
        result = asyncio.run(provider.analyze(IMAGE_B64, ["cat"], mime_type="image/png"))

        content = captured["body"]["messages"][0]["content"]
        assert result == "a cat is present"
        assert content[0]["text"].endswith("in the image: cat")
        assert content[1]["image_url"]["url"] == f"data:image/png;base64,{IMAGE_B64}"

    def test_transient_failure_is_retried(self, provider_config):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(503, text="busy")
            return openai_reply("second time lucky")

        provider = OpenAITextProvider(provider_config, transport=httpx.MockTransport(handler))

        assert asyncio.run(provider.complete("hi")) == "second time lucky"
        assert len(calls) == 2

    def test_retries_are_bounded(self, provider_config):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(429, text="slow down")

        provider = OpenAITextProvider(provider_config, transport=httpx.MockTransport(handler))

        with pytest.raises(ProviderError):
            asyncio.run(provider.complete("hi"))
        assert len(calls) == provider_config.max_retries + 1

    def test_zero_retries_makes_one_attempt(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503, text="busy")

        config = ProviderConfig(api_key="test-key", base_url="https://provider.test/v1", max_retries=0, retry_wait=0)
        provider = OpenAITextProvider(config, transport=httpx.MockTransport(handler))

        with pytest.raises(ProviderError):
            asyncio.run(provider.complete("hi"))
        assert len(calls) == 1

    def test_client_error_is_not_retried(self, provider_config):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(401, text="bad key")

        provider = OpenAITextProvider(provider_config, transport=httpx.MockTransport(handler))

        with pytest.raises(ProviderError):
            asyncio.run(provider.complete("hi"))
        assert len(calls) == 1

    def test_missing_key(self):
        provider = OpenAITextProvider(ProviderConfig(base_url="https://provider.test/v1"))

        with pytest.raises(ProviderError):
            asyncio.run(provider.complete("hi"))


class TestGeminiProvider:
    """Tests for the Gemini binding, which swallows failures."""

    def test_analyze_joins_parts(self, provider_config):
        captured = {}

        def handler(request):
            captured["url"] = request.url
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "candidates": [{"content": {"parts": [{"text": "Yes, "}, {"text": "a cat."}]}}]
            })

        provider = GeminiVisionProvider(provider_config, transport=httpx.MockTransport(handler))
        result = asyncio.run(provider.analyze(f"data:image/png;base64,{IMAGE_B64}", ["cat"], mime_type="image/png"))

        parts = captured["body"]["contents"][0]["parts"]
        assert result == "Yes, a cat."
        assert captured["url"].path == "/v1/models/test-model:generateContent"
        assert captured["url"].params["key"] == "test-key"
        assert parts[1]["inline_data"] == {"mime_type": "image/png", "data": IMAGE_B64}

    def test_failure_returns_none(self, provider_config):
        provider = GeminiVisionProvider(
            provider_config,
            transport=httpx.MockTransport(lambda request: httpx.Response(400, text="bad"))
        )
        assert asyncio.run(provider.analyze(IMAGE_B64, ["cat"])) is None

    def test_malformed_reply_returns_none(self, provider_config):
        provider = GeminiVisionProvider(
            provider_config,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
        )
        assert asyncio.run(provider.analyze(IMAGE_B64, ["cat"])) is None


class TestClaudeProvider:
    """Tests for the Claude binding, which swallows failures."""

    def test_analyze_returns_first_text_block(self, provider_config):
        captured = {}

        def handler(request):
            captured["headers"] = request.headers
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"content": [{"type": "text", "text": "I see a dog"}]})

        provider = ClaudeVisionProvider(provider_config, transport=httpx.MockTransport(handler), max_tokens=256)
        result = asyncio.run(provider.analyze(IMAGE_B64, ["dog"], action=DetectionAction.MEASUREMENTS))

        content = captured["body"]["messages"][0]["content"]
        assert result == "I see a dog"
        assert captured["headers"]["x-api-key"] == "test-key"
        assert captured["body"]["max_tokens"] == 256
        assert content[0]["source"]["data"] == IMAGE_B64
        assert "rough measurements" in content[1]["text"]

    def test_failure_returns_none(self, provider_config):
        def handler(request):
            raise httpx.ConnectError("no route")

        provider = ClaudeVisionProvider(provider_config, transport=httpx.MockTransport(handler))
        assert asyncio.run(provider.analyze(IMAGE_B64, ["dog"])) is None


class TestRekognitionProvider:
    """Tests for the Rekognition label binding."""

    def test_labels_are_joined(self):
        client = FakeRekognitionClient({"Labels": [{"Name": "item1"}, {"Name": "item2"}]})
        provider = RekognitionProvider(ProviderConfig(region="us-east-1"), client=client)

        result = asyncio.run(provider.analyze(IMAGE_B64, ["ignored"]))

        assert result == "item1, item2"
        assert client.calls == [{"Image": {"Bytes": b"hello"}, "MaxLabels": 10, "MinConfidence": 70.0}]

    def test_missing_labels_returns_none(self):
        provider = RekognitionProvider(ProviderConfig(), client=FakeRekognitionClient({}))
        assert asyncio.run(provider.analyze(IMAGE_B64, ["x"])) is None

    def test_client_error_raises(self):
        error = ClientError({"Error": {"Code": "InvalidImageFormatException", "Message": "bad"}}, "DetectLabels")
        provider = RekognitionProvider(ProviderConfig(), client=FakeRekognitionClient(error=error))

        with pytest.raises(ProviderError):
            asyncio.run(provider.analyze(IMAGE_B64, ["x"]))

    def test_invalid_base64_raises(self):
        provider = RekognitionProvider(ProviderConfig(), client=FakeRekognitionClient({"Labels": []}))

        with pytest.raises(ProviderError):
            asyncio.run(provider.analyze("not base64!", ["x"]))
