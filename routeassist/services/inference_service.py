import asyncio
import logging
from typing import Awaitable, Callable, Optional

from google import genai
from google.genai import types

from ..config import settings
from ..models.inference import ExtractionAttempt, ImagePayload

logger = logging.getLogger(__name__)

GenerateFn = Callable[[str, ImagePayload], Awaitable[Optional[str]]]
SleepFn = Callable[[float], Awaitable[None]]


class MaxRetriesReached(RuntimeError):
    """Every permitted attempt failed. ``attempts`` holds the recorded failures."""

    def __init__(self, attempts: list[ExtractionAttempt]):
        super().__init__("Max retries reached")
        self.attempts = attempts


# ---------------------------------------------------------------------------
# Gemini call
# ---------------------------------------------------------------------------

async def _gemini_generate(instruction: str, image: ImagePayload) -> Optional[str]:
    # A fresh client per attempt; nothing is reused between attempts.
    client = genai.Client(api_key=settings.gemini_api_key)
    response = await client.aio.models.generate_content(
        model=settings.gemini_model,
        contents=[
            types.Part.from_text(text=instruction),
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
        ],
    )
    return response.text


# ---------------------------------------------------------------------------
# Retry loop
# ---------------------------------------------------------------------------

def backoff_delay(attempt: int, retry_delay_ms: int) -> float:
    """Seconds to wait after failed attempt ``attempt`` (0-based): base * 2**attempt."""
    return retry_delay_ms * (2 ** attempt) / 1000


async def generate_with_retry(
    instruction: str,
    image: ImagePayload,
    *,
    generate: Optional[GenerateFn] = None,
    sleep: SleepFn = asyncio.sleep,
    max_retries: Optional[int] = None,
    retry_delay_ms: Optional[int] = None,
) -> str:
    """
    Ask the vision model for text describing ``image`` according to ``instruction``.

    Any failure of a single call is logged and retried after an exponential
    backoff. Returns the stripped model text, or raises MaxRetriesReached once
    all attempts are used up.
    """
    if not instruction or not instruction.strip():
        raise ValueError("instruction is empty")

    generate = generate or _gemini_generate
    max_retries = settings.extraction_max_retries if max_retries is None else max_retries
    retry_delay_ms = settings.extraction_retry_delay_ms if retry_delay_ms is None else retry_delay_ms
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    attempts: list[ExtractionAttempt] = []

    for index in range(max_retries):
        try:
            text = await generate(instruction, image)
            if text is None:
                raise ValueError("model returned no text")
        except Exception as exc:
            attempt = ExtractionAttempt(index=index, error=exc)
            attempts.append(attempt)

            if index == max_retries - 1:
                logger.error("Attempt %s/%s failed: %s. Giving up.", index + 1, max_retries, exc)
                raise MaxRetriesReached(attempts) from exc

            attempt.delay = backoff_delay(index, retry_delay_ms)
            logger.warning(
                "Attempt %s/%s failed: %s. Retrying in %.1fs.",
                index + 1,
                max_retries,
                exc,
                attempt.delay,
            )
            await sleep(attempt.delay)
            continue

        text = text.strip()
        logger.info("Model answered on attempt %s/%s.", index + 1, max_retries)
        return text

    # Unreachable: the last failed attempt raises inside the loop.
    raise MaxRetriesReached(attempts)
