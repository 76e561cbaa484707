"""
Detection Service - Routes an image to the selected vision provider
"""

import logging
from enum import Enum
from typing import List, Optional

from ai_gateway.core.exceptions import InvalidSelectionError
from ai_gateway.providers.base import DetectionAction

logger = logging.getLogger(__name__)


class AISelector(str, Enum):
    OPEN_AI = 'OpenAI gpt-4o'
    GEMINI = 'Google gemini-light'
    CLAUDE = 'Anthropic Claude-3'
    AWS_REKOGNITION = 'AWS Rekognition'


DEFAULT_SELECTOR = AISelector.OPEN_AI


def parse_selector(value: Optional[str]) -> AISelector:
    """
    Resolve a caller-supplied selector

    Raises:
        InvalidSelectionError: If the value is not a supported provider
    """
    if value is None or value == '':
        return DEFAULT_SELECTOR
    try:
        return AISelector(value.strip())
    except ValueError:
        raise InvalidSelectionError("Invalid AI selection")


class DetectionService:
    """Dispatches analyze calls to one of the fixed provider variants"""

    def __init__(self, openai_provider, gemini_provider, claude_provider, rekognition_provider):
        self.openai_provider = openai_provider
        self.gemini_provider = gemini_provider
        self.claude_provider = claude_provider
        self.rekognition_provider = rekognition_provider

    def provider_for(self, selector: AISelector, action: DetectionAction = DetectionAction.DETECT):
        if selector == AISelector.OPEN_AI:
            return self.openai_provider
        elif selector == AISelector.GEMINI:
            return self.gemini_provider
        elif selector == AISelector.CLAUDE:
            return self.claude_provider
        elif selector == AISelector.AWS_REKOGNITION:
            if action != DetectionAction.DETECT:
                raise InvalidSelectionError("Invalid AI selection")
            return self.rekognition_provider
        raise InvalidSelectionError("Invalid AI selection")

    async def analyze(
        self,
        selector: AISelector,
        image_base64: str,
        items: List[str],
        action: DetectionAction = DetectionAction.DETECT,
        mime_type: str = "image/jpeg"
    ) -> Optional[str]:
        """
        Analyze an image with the selected provider

        Returns:
            Provider text, or None when a provider swallowed its failure
        """
        provider = self.provider_for(selector, action)
        logger.info(f"Running {action.value} with {selector.value} for {len(items)} item(s)")
        return await provider.analyze(image_base64, items, action=action, mime_type=mime_type)
