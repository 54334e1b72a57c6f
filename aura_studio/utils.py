"""
Utility Functions
Data-URI handling, image type sniffing and result download
"""

import os
import io
import base64
import binascii
import logging
import time
from typing import Optional, Tuple

import requests
from PIL import Image, UnidentifiedImageError

from .models import GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = 'image/jpeg'


def strip_data_uri(image: str) -> str:
    """Return the bare base64 payload of a data URI (or the input if it is already bare)"""
    if image.startswith('data:') and ',' in image:
        return image.split(',', 1)[1]
    return image


def detect_mime_type(data: bytes) -> Optional[str]:
    """
    Sniff the MIME type of encoded image bytes

    Returns:
        str: MIME type such as image/png, or None if Pillow cannot identify it
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format)
    except (UnidentifiedImageError, OSError):
        return None


def parse_data_uri(image: str) -> Tuple[str, bytes]:
    """
    Split an image string into (mime type, raw bytes)

    Accepts a data URI or bare base64. Bare payloads are sniffed with Pillow.
    """
    mime_type = None
    if image.startswith('data:') and ',' in image:
        header = image[5:image.index(',')]
        mime_type = header.split(';')[0] or None

    try:
        data = base64.b64decode(strip_data_uri(image), validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Image is not valid base64: {e}") from e

    if not mime_type:
        mime_type = detect_mime_type(data) or DEFAULT_MIME_TYPE
    return mime_type, data


def to_data_uri(image: str) -> str:
    """Full data URI for an image given as a data URI or bare base64"""
    if image.startswith('data:'):
        return image
    mime_type, _ = parse_data_uri(image)
    return f"data:{mime_type};base64,{image}"


def bytes_to_data_uri(data: bytes, mime_type: str = 'image/png') -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def download_result(result: GenerationResult, directory: str = '.', filename: Optional[str] = None,
                    timeout: int = 60) -> str:
    """
    Save a generated image to disk as PNG

    Args:
        result: Generation result holding a data URI or URL
        directory: Target directory, created if missing
        filename: Output name, defaults to render-<ms>.png
        timeout: Download timeout in seconds for URL results

    Returns:
        str: Path of the written file
    """
    os.makedirs(directory, exist_ok=True)
    filename = filename or f"render-{int(time.time() * 1000)}.png"
    output_path = os.path.join(directory, filename)

    if result.is_data_uri:
        _, data = parse_data_uri(result.image_data)
    else:
        logger.info(f"📥 Downloading result from {result.image_data[:80]}")
        response = requests.get(result.image_data, timeout=timeout)
        response.raise_for_status()
        data = response.content

    with Image.open(io.BytesIO(data)) as img:
        if img.mode not in ('RGB', 'RGBA'):
            img = img.convert('RGBA')
        img.save(output_path, format='PNG', optimize=True)

    logger.info(f"✅ Result saved to {output_path}")
    return output_path
