"""Gemini vision binding (generateContent REST endpoint)"""

import logging
from typing import List, Optional

from ai_gateway.core.exceptions import ProviderError
from ai_gateway.providers.base import DetectionAction, HTTPProvider, build_image_prompt
from ai_gateway.utils.image_utils import strip_base64_prefix

logger = logging.getLogger(__name__)


class GeminiVisionProvider(HTTPProvider):
    """Errors are logged and turned into ``None``"""

    name = "Gemini"

    async def analyze(
        self,
        image_base64: str,
        items: List[str],
        action: DetectionAction = DetectionAction.DETECT,
        mime_type: str = "image/jpeg"
    ) -> Optional[str]:
        try:
            if not self.config.api_key:
                raise ProviderError("Gemini API key not configured")

            result = await self.post_json(
                f"{self.config.base_url}/models/{self.config.model}:generateContent",
                params={"key": self.config.api_key},
                payload={
                    "contents": [{
                        "parts": [
                            {"text": build_image_prompt(action, items)},
                            {"inline_data": {"mime_type": mime_type, "data": strip_base64_prefix(image_base64)}}
                        ]
                    }]
                }
            )
            parts = result["candidates"][0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)

        except Exception as e:
            logger.error(f"Gemini detection error: {str(e)}")
            return None
