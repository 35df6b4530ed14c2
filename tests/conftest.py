"""Shared pytest configuration and fixtures."""
from __future__ import annotations

import base64
import os

# Provide required env vars before any app module is imported
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("EXTRACTION_MAX_RETRIES", "3")
os.environ.setdefault("EXTRACTION_RETRY_DELAY_MS", "5000")

import pytest  # noqa: E402

# Smallest useful JPEG-looking payload: SOI marker plus a few bytes.
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def jpeg_data_uri() -> str:
    return "data:image/jpeg;base64," + base64.b64encode(JPEG_BYTES).decode()


@pytest.fixture
def png_base64() -> str:
    return base64.b64encode(PNG_BYTES).decode()
