"""
AWS Rekognition label detection binding.

Returns the detected label names joined by ", ". The boto3 client is created
lazily from the provider configuration; a ready client may be injected.
"""

import asyncio
import base64
import binascii
import logging
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ai_gateway.core.config import ProviderConfig
from ai_gateway.core.exceptions import ProviderError
from ai_gateway.providers.base import DetectionAction
from ai_gateway.utils.image_utils import strip_base64_prefix

logger = logging.getLogger(__name__)


class RekognitionProvider:
    """Managed vision-label API; failures propagate as ProviderError"""

    name = "AWS Rekognition"

    def __init__(
        self,
        config: ProviderConfig,
        max_labels: int = 10,
        min_confidence: float = 70.0,
        client=None
    ):
        self.config = config
        self.max_labels = max_labels
        self.min_confidence = min_confidence
        self._client = client

    def _get_client(self):
        if self._client is None:
            try:
                self._client = boto3.client(
                    "rekognition",
                    aws_access_key_id=self.config.api_key or None,
                    aws_secret_access_key=self.config.secret_key,
                    region_name=self.config.region
                )
            except BotoCoreError as e:
                logger.error(f"Failed to create Rekognition client: {e}")
                raise ProviderError("Rekognition client unavailable") from e
        return self._client

    async def analyze(
        self,
        image_base64: str,
        items: List[str],
        action: DetectionAction = DetectionAction.DETECT,
        mime_type: str = "image/jpeg"
    ) -> Optional[str]:
        # items are not sent; Rekognition reports whatever labels it finds
        try:
            image_bytes = base64.b64decode(strip_base64_prefix(image_base64))
        except (binascii.Error, ValueError) as e:
            raise ProviderError("Image is not valid base64") from e

        client = self._get_client()
        try:
            response = await asyncio.to_thread(
                client.detect_labels,
                Image={"Bytes": image_bytes},
                MaxLabels=self.max_labels,
                MinConfidence=self.min_confidence
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Rekognition detect_labels failed: {e}")
            raise ProviderError("Rekognition request failed") from e

        labels = response.get("Labels")
        if labels is None:
            return None
        return ", ".join(label["Name"] for label in labels)
