"""
Values Router - API endpoint for reading field values off an image
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from typing import List, Optional
import logging

from ai_gateway.core.dependencies import get_values_service
from ai_gateway.core.exceptions import CLIENT_ERRORS, ProviderError, ValidationError
from ai_gateway.schemas import ValuesResponse
from ai_gateway.services.values_service import ValuesService
from ai_gateway.utils.image_utils import read_upload_image
from ai_gateway.utils.validation import parse_list_field

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/values", response_model=ValuesResponse)
async def get_values_from_fields(
    image: Optional[UploadFile] = File(None, description="Image containing the fields"),
    fields: Optional[List[str]] = Form(None, description="Field names, repeated or comma-separated"),
    service: ValuesService = Depends(get_values_service)
):
    """
    Extract the values of named fields from an image

    **Response:**
    - `response`: List of `{field, value}` objects
    """
    field_list = parse_list_field(fields)
    if image is None or not field_list:
        raise ValidationError("Invalid request")

    try:
        image_base64, mime_type = await read_upload_image(image)
        values = await service.extract(image_base64, field_list, mime_type=mime_type)
        return ValuesResponse(response=values)

    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.error(f"Values extraction error: {str(e)}", exc_info=True)
        raise ProviderError("Failed to process the AI response")
