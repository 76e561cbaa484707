"""
Values Service - Extracts field values from an image with the vision model
"""

import json
import logging
import re
from typing import List

from pydantic import TypeAdapter, ValidationError as SchemaValidationError

from ai_gateway.core.exceptions import ProviderError
from ai_gateway.schemas import FieldValue

logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(r'```(?:json)?\s*|\s*```')

_FIELD_VALUES = TypeAdapter(List[FieldValue])


def build_fields_prompt(fields: List[str]) -> str:
    return (
        f"Please analyze this image and extract the value of the following fields: {', '.join(fields)}. "
        f"Return the results as a JSON array of objects, where each object has a 'field' and a 'value' property."
    )


def parse_field_values(response: str) -> List[FieldValue]:
    """
    Parse the model's JSON answer into field/value pairs

    Raises:
        ProviderError: If the answer is not a valid field/value array
    """
    cleaned = CODE_FENCE_PATTERN.sub('', response or '').strip()
    try:
        return _FIELD_VALUES.validate_python(json.loads(cleaned))
    except (json.JSONDecodeError, SchemaValidationError) as e:
        logger.error(f"Error parsing or validating response: {e}")
        raise ProviderError("Failed to process the AI response") from e


class ValuesService:
    """Service for reading labelled values off an image"""

    def __init__(self, vision_provider):
        self.vision_provider = vision_provider

    async def extract(self, image_base64: str, fields: List[str], mime_type: str = "image/jpeg") -> List[FieldValue]:
        response = await self.vision_provider.ask(image_base64, build_fields_prompt(fields), mime_type)
        return parse_field_values(response)
