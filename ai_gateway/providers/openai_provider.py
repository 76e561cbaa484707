"""
OpenAI bindings: the text completion model used for translation and
document Q&A, and the default vision-language model.
"""

import logging
from typing import Dict, List

from ai_gateway.core.exceptions import ProviderError
from ai_gateway.providers.base import DetectionAction, HTTPProvider, build_image_prompt
from ai_gateway.utils.image_utils import format_base64_image

logger = logging.getLogger(__name__)


class OpenAIProvider(HTTPProvider):
    """Chat completions over the OpenAI REST API"""

    name = "OpenAI"

    async def _chat(self, content, temperature: float = 0) -> str:
        if not self.config.api_key:
            raise ProviderError("OpenAI API key not configured")

        result = await self.post_json(
            f"{self.config.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json"
            },
            payload={
                "model": self.config.model,
                "temperature": temperature,
                "messages": [{"role": "user", "content": content}]
            }
        )
        try:
            return result["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("OpenAI response had no message content") from e


class OpenAITextProvider(OpenAIProvider):
    """Plain prompt-in, text-out completion"""

    async def complete(self, prompt: str) -> str:
        return await self._chat(prompt)


class OpenAIVisionProvider(OpenAIProvider):
    """Default vision-language model; failures propagate as ProviderError"""

    async def ask(self, image_base64: str, prompt: str, mime_type: str = "image/jpeg") -> str:
        content: List[Dict] = [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": format_base64_image(image_base64, mime_type)}}
        ]
        return await self._chat(content)

    async def analyze(
        self,
        image_base64: str,
        items: List[str],
        action: DetectionAction = DetectionAction.DETECT,
        mime_type: str = "image/jpeg"
    ) -> str:
        return await self.ask(image_base64, build_image_prompt(action, items), mime_type)
