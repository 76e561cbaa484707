"""
API Utilities Package

Contains utility modules for:
- Image encoding and format detection
- Form input normalization and URL checks
- Document retrieval and PDF text extraction
"""

from .image_utils import (
    convert_to_base64,
    detect_mime_type,
    format_base64_image,
    read_upload_image,
    strip_base64_prefix
)
from .validation import first_value, parse_list_field, validate_url
from .pdf_utils import extract_pdf_text, fetch_pdf, get_pdf_buffer, read_input_buffer

__all__ = [
    # Image utilities
    'convert_to_base64',
    'detect_mime_type',
    'format_base64_image',
    'read_upload_image',
    'strip_base64_prefix',

    # Validation utilities
    'first_value',
    'parse_list_field',
    'validate_url',

    # Document utilities
    'extract_pdf_text',
    'fetch_pdf',
    'get_pdf_buffer',
    'read_input_buffer'
]
