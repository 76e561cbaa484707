"""
Detection Router - API endpoints for image analysis
Handles /detect and /measurements, dispatching to the selected vision provider
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from typing import List, Optional, Tuple
import logging

from ai_gateway.core.dependencies import get_detection_service
from ai_gateway.core.exceptions import CLIENT_ERRORS, ProviderError, ValidationError
from ai_gateway.providers.base import DetectionAction
from ai_gateway.schemas import DetectionResponse, MeasurementsResponse
from ai_gateway.services.detection_service import AISelector, DetectionService, parse_selector
from ai_gateway.utils.image_utils import read_upload_image
from ai_gateway.utils.validation import first_value, parse_list_field

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_request(
    image: Optional[UploadFile],
    items: Optional[List[str]],
    ai_to_use: Optional[List[str]]
) -> Tuple[List[str], AISelector]:
    """Validate the form before any provider is called"""
    item_list = parse_list_field(items)
    if image is None or not item_list:
        raise ValidationError("Invalid request")
    return item_list, parse_selector(first_value(ai_to_use))


async def _run_analysis(
    service: DetectionService,
    action: DetectionAction,
    image: Optional[UploadFile],
    items: Optional[List[str]],
    ai_to_use: Optional[List[str]],
    failure_message: str
) -> Optional[str]:
    item_list, selector = _parse_request(image, items, ai_to_use)
    # Rekognition cannot estimate measurements
    service.provider_for(selector, action)

    try:
        image_base64, mime_type = await read_upload_image(image)
        return await service.analyze(selector, image_base64, item_list, action=action, mime_type=mime_type)
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.error(f"{action.value} error with {selector.value}: {str(e)}", exc_info=True)
        raise ProviderError(failure_message)


@router.post("/detect", response_model=DetectionResponse)
async def detect_items(
    image: Optional[UploadFile] = File(None, description="Image to analyze"),
    items: Optional[List[str]] = Form(None, description="Items to look for, repeated or comma-separated"),
    aiToUse: Optional[List[str]] = Form(None, description="Provider selector"),
    service: DetectionService = Depends(get_detection_service)
):
    """
    Detect whether the given items appear in an image

    **Providers (`aiToUse`):**
    - `OpenAI gpt-4o` (default)
    - `Google gemini-light`
    - `Anthropic Claude-3`
    - `AWS Rekognition` (returns the detected labels)

    **Response:**
    - `detectedItems`: Provider answer, or null if the provider returned nothing
    """
    detected = await _run_analysis(
        service, DetectionAction.DETECT, image, items, aiToUse, "Failed to detect items"
    )
    return DetectionResponse(detectedItems=detected)


@router.post("/measurements", response_model=MeasurementsResponse)
async def estimate_measurements(
    image: Optional[UploadFile] = File(None, description="Image to analyze"),
    items: Optional[List[str]] = Form(None, description="Items to measure, repeated or comma-separated"),
    aiToUse: Optional[List[str]] = Form(None, description="Provider selector"),
    service: DetectionService = Depends(get_detection_service)
):
    """
    Estimate rough measurements of items in an image

    Accepts the same form as `/detect`. `AWS Rekognition` is not available
    for this action.

    **Response:**
    - `measurements`: Provider answer, or null if the provider returned nothing
    """
    measurements = await _run_analysis(
        service, DetectionAction.MEASUREMENTS, image, items, aiToUse, "Failed to get measurements"
    )
    return MeasurementsResponse(measurements=measurements)
