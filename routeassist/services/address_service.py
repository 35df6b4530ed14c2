import base64
import binascii
import logging
import re

from ..config import settings
from ..models.inference import ImagePayload
from .inference_service import generate_with_retry

logger = logging.getLogger(__name__)

ADDRESS_PROMPT = (
    "Extract only the address from this image. "
    "If multiple addresses are present, choose the most prominent one. "
    "Return only the address, nothing else."
)

_DATA_URI_HEADER = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]*)*)$", re.IGNORECASE)


def _guess_mime_type(image_bytes: bytes, fallback: str = "image/jpeg") -> str:
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return fallback


def decode_data_uri(data_uri: str) -> ImagePayload:
    """Turn ``data:image/png;base64,...`` (or bare base64) into an ImagePayload."""
    data_uri = (data_uri or "").strip()
    mime = None

    if data_uri.lower().startswith("data:"):
        header, sep, encoded = data_uri.partition(",")
        match = _DATA_URI_HEADER.match(header)
        if not sep or not match:
            raise ValueError("malformed data URI")
        if ";base64" not in match.group("params").lower():
            raise ValueError("data URI is not base64 encoded")
        mime = match.group("mime")
    else:
        encoded = data_uri

    try:
        image_bytes = base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"image is not valid base64: {exc}") from exc

    if not image_bytes:
        raise ValueError("image is empty")

    return ImagePayload(data=image_bytes, mime_type=(mime or _guess_mime_type(image_bytes)).lower())


async def extract_address(data_uri: str) -> str:
    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY is not configured")

    image = decode_data_uri(data_uri)
    logger.info("Extracting address from %s image (%s bytes).", image.mime_type, len(image.data))
    return await generate_with_retry(ADDRESS_PROMPT, image)
