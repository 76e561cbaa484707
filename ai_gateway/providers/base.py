"""
Shared plumbing for provider bindings.

Every HTTP provider posts JSON through ``post_json``, which applies the
configured timeout and retries transient failures (transport errors, 429
and 5xx responses) with exponential backoff.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ai_gateway.core.config import ProviderConfig
from ai_gateway.core.exceptions import ProviderError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class RetryableProviderError(ProviderError):
    """Transient failure worth another attempt"""


class DetectionAction(str, Enum):
    DETECT = "detect"
    MEASUREMENTS = "measurements"


def build_image_prompt(action: DetectionAction, items: List[str]) -> str:
    """Build the instruction sent alongside an image"""
    joined = ", ".join(items)
    if action == DetectionAction.MEASUREMENTS:
        return (
            f"Please analyze this image and provide the rough measurements of either the items "
            f"specified: {joined} and or the things you see in the image using rough estimates "
            f"based on the items that might be in the image."
        )
    return f"Please analyze this image and detect if the following items are in the image: {joined}"


class HTTPProvider:
    """Base class for providers reached over HTTP"""

    name = "provider"

    def __init__(self, config: ProviderConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    async def post_json(
        self,
        url: str,
        payload: Dict,
        headers: Optional[Dict] = None,
        params: Optional[Dict] = None
    ) -> Dict:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(0, self.config.max_retries) + 1),
            wait=wait_exponential(multiplier=self.config.retry_wait, max=10),
            retry=retry_if_exception_type(RetryableProviderError),
            reraise=True
        )
        async for attempt in retrying:
            with attempt:
                return await self._post_once(url, payload, headers, params)

    async def _post_once(
        self,
        url: str,
        payload: Dict,
        headers: Optional[Dict],
        params: Optional[Dict]
    ) -> Dict:
        async with httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport) as client:
            try:
                response = await client.post(url, headers=headers, params=params, json=payload)
            except httpx.TransportError as e:
                logger.warning(f"{self.name} transport error: {e}")
                raise RetryableProviderError(f"{self.name} request failed: {e}") from e

        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(f"{self.name} returned {response.status_code}, retrying")
            raise RetryableProviderError(f"{self.name} returned {response.status_code}")

        if response.status_code != 200:
            logger.error(f"{self.name} error: {response.status_code} - {response.text}")
            raise ProviderError(f"{self.name} returned {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"{self.name} returned invalid JSON") from e
