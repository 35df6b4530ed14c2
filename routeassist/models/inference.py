from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str = "image/jpeg"

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("image payload is empty")
        if not self.mime_type.startswith("image/"):
            raise ValueError(f"unsupported mime type: {self.mime_type!r}")


@dataclass
class ExtractionAttempt:
    """One model invocation inside a single request's retry sequence.

    ``text`` is set on success, ``error`` on failure. ``delay`` is the backoff
    (seconds) slept after a failed attempt; the last failed attempt has none.
    """

    index: int
    text: Optional[str] = None
    error: Optional[BaseException] = None
    delay: Optional[float] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
