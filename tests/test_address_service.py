"""Address service tests — data URI decoding and delegation to the inference client."""
from __future__ import annotations

import base64

import pytest

from routeassist.services import address_service
from routeassist.services.address_service import ADDRESS_PROMPT, decode_data_uri


def test_decode_data_uri_strips_scheme_prefix(jpeg_data_uri, jpeg_bytes) -> None:
    payload = decode_data_uri(jpeg_data_uri)
    assert payload.data == jpeg_bytes
    assert payload.mime_type == "image/jpeg"


def test_decode_data_uri_keeps_declared_mime(jpeg_bytes) -> None:
    uri = "data:image/PNG;base64," + base64.b64encode(jpeg_bytes).decode()
    assert decode_data_uri(uri).mime_type == "image/png"


def test_decode_bare_base64_sniffs_mime(png_base64) -> None:
    assert decode_data_uri(png_base64).mime_type == "image/png"


def test_decode_unknown_bytes_falls_back_to_jpeg() -> None:
    encoded = base64.b64encode(b"not really an image").decode()
    assert decode_data_uri(encoded).mime_type == "image/jpeg"


@pytest.mark.parametrize(
    "uri",
    [
        "",
        "data:image/jpeg;base64,",
        "data:image/jpeg;base64,@@@not-base64@@@",
        "data:image/jpeg,rawdata",
        "data:image/jpeg;base64",
        "data:text/plain;base64," + base64.b64encode(b"hello").decode(),
    ],
)
def test_decode_rejects_bad_input(uri) -> None:
    with pytest.raises(ValueError):
        decode_data_uri(uri)


@pytest.mark.asyncio
async def test_extract_address_uses_fixed_prompt(jpeg_data_uri, jpeg_bytes, monkeypatch) -> None:
    seen = {}

    async def fake_generate_with_retry(instruction, image):
        seen["instruction"] = instruction
        seen["image"] = image
        return "10 Downing Street, London"

    monkeypatch.setattr(address_service, "generate_with_retry", fake_generate_with_retry)

    assert await address_service.extract_address(jpeg_data_uri) == "10 Downing Street, London"
    assert seen["instruction"] == ADDRESS_PROMPT
    assert seen["image"].data == jpeg_bytes


@pytest.mark.asyncio
async def test_extract_address_requires_api_key(jpeg_data_uri, monkeypatch) -> None:
    monkeypatch.setattr(address_service.settings, "gemini_api_key", "")
    with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
        await address_service.extract_address(jpeg_data_uri)
