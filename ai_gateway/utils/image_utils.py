"""
Image Utilities Module

Contains functions for image processing:
- Base64 conversion and data URL prefix handling
- Format detection for provider media types
"""

import base64
import io
import logging
from typing import Tuple
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"


def strip_base64_prefix(image_base64: str) -> str:
    """
    Remove a data URL prefix from a base64 image if present

    Args:
        image_base64: Base64 image data (with or without data URL prefix)

    Returns:
        Bare base64 payload
    """
    if image_base64.startswith('data:'):
        return image_base64.split(',', 1)[1]
    return image_base64


def format_base64_image(image_base64: str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """
    Add a data URL prefix to a base64 image

    Args:
        image_base64: Base64 image data
        mime_type: Media type for the prefix

    Returns:
        Data URL string
    """
    if image_base64.startswith('data:'):
        return image_base64
    return f"data:{mime_type};base64,{image_base64}"


def convert_to_base64(image_bytes: bytes) -> str:
    """Encode raw file bytes as base64 text"""
    return base64.b64encode(image_bytes).decode('utf-8')


def detect_mime_type(image_bytes: bytes) -> str:
    """
    Detect the media type of an image

    Falls back to JPEG when the bytes cannot be identified.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            return Image.MIME.get(image.format, DEFAULT_MIME_TYPE)
    except (UnidentifiedImageError, OSError, ValueError):
        logger.debug("Could not identify image format, assuming JPEG")
        return DEFAULT_MIME_TYPE


async def read_upload_image(upload) -> Tuple[str, str]:
    """
    Read an uploaded image

    Args:
        upload: Uploaded file exposing an async read()

    Returns:
        Tuple of (base64_data, mime_type)
    """
    image_bytes = await upload.read()
    return convert_to_base64(image_bytes), detect_mime_type(image_bytes)
