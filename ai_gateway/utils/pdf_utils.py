"""
Document input helpers.

Resolves a document from an uploaded buffer, a local path or a remote URL,
and extracts its text with PyMuPDF.
"""

import logging
import os
from typing import Optional, Union

import aiofiles
import fitz  # PyMuPDF
import httpx

from ai_gateway.core.exceptions import LoadError, RetrievalError, UnsupportedInputError, ValidationError
from ai_gateway.utils.validation import validate_url

logger = logging.getLogger(__name__)

InputSource = Union[bytes, bytearray, str, os.PathLike]


async def read_input_buffer(source: InputSource) -> bytes:
    """
    Read an input that is either a byte buffer or a path on disk

    Raises:
        UnsupportedInputError: If the source is neither
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, (str, os.PathLike)):
        path = os.fspath(source)
        if not os.path.isfile(path):
            raise UnsupportedInputError("Unsupported file format")
        async with aiofiles.open(path, 'rb') as f:
            return await f.read()

    raise UnsupportedInputError("Unsupported file format")


async def fetch_pdf(
    pdf_url: str,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> bytes:
    """
    Download a PDF

    Raises:
        UnsupportedInputError: If the URL is malformed
        RetrievalError: If the request fails or returns a non-2xx status
    """
    if not validate_url(pdf_url):
        raise UnsupportedInputError("Invalid PDF URL")

    url = pdf_url if pdf_url.startswith(('http://', 'https://')) else f"https://{pdf_url}"

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
            response = await client.get(url)
    except httpx.InvalidURL as e:
        logger.info(f"Rejected PDF URL {url}: {e}")
        raise UnsupportedInputError("Invalid PDF URL") from e
    except httpx.HTTPError as e:
        logger.error(f"PDF fetch error for {url}: {e}")
        raise RetrievalError(f"Failed to fetch PDF from URL: {e}") from e

    if not response.is_success:
        raise RetrievalError(
            f"Failed to fetch PDF from URL: {response.reason_phrase}",
            status=response.status_code
        )
    return response.content


async def get_pdf_buffer(
    file: Optional[InputSource],
    pdf_url: Optional[str],
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> bytes:
    """
    Resolve PDF bytes from an uploaded file or a URL; the file wins when both are given
    """
    if not file and not pdf_url:
        raise ValidationError("Either a file or a URL must be provided")

    if file:
        return await read_input_buffer(file)

    return await fetch_pdf(pdf_url, timeout=timeout, transport=transport)


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Extract the text of every page

    Raises:
        LoadError: If the bytes are not a readable PDF
    """
    try:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
            pages = [page.get_text() for page in document]
    except (RuntimeError, ValueError) as e:
        raise LoadError(f"Unable to read PDF: {e}") from e

    return "\n".join(pages).strip()
