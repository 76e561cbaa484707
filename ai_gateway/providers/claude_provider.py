"""Claude vision binding (Anthropic messages REST endpoint)"""

import logging
from typing import List, Optional

import httpx

from ai_gateway.core.config import ProviderConfig
from ai_gateway.core.exceptions import ProviderError
from ai_gateway.providers.base import DetectionAction, HTTPProvider, build_image_prompt
from ai_gateway.utils.image_utils import strip_base64_prefix

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


class ClaudeVisionProvider(HTTPProvider):
    """Errors are logged and turned into ``None``"""

    name = "Claude"

    def __init__(
        self,
        config: ProviderConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_tokens: int = 1024
    ):
        super().__init__(config, transport)
        self.max_tokens = max_tokens

    async def analyze(
        self,
        image_base64: str,
        items: List[str],
        action: DetectionAction = DetectionAction.DETECT,
        mime_type: str = "image/jpeg"
    ) -> Optional[str]:
        try:
            if not self.config.api_key:
                raise ProviderError("Claude API key not configured")

            result = await self.post_json(
                f"{self.config.base_url}/messages",
                headers={
                    "x-api-key": self.config.api_key,
                    "anthropic-version": ANTHROPIC_VERSION,
                    "Content-Type": "application/json"
                },
                payload={
                    "model": self.config.model,
                    "max_tokens": self.max_tokens,
                    "messages": [{
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": mime_type,
                                    "data": strip_base64_prefix(image_base64)
                                }
                            },
                            {"type": "text", "text": build_image_prompt(action, items)}
                        ]
                    }]
                }
            )
            return result["content"][0]["text"]

        except Exception as e:
            logger.error(f"Claude detection error: {str(e)}")
            return None
