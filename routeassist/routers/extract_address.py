import logging

from fastapi import APIRouter, HTTPException, status

from ..models.extract_address import ExtractAddressRequest, ExtractAddressResponse
from ..services.address_service import extract_address
from ..services.inference_service import MaxRetriesReached

router = APIRouter(prefix="/api", tags=["Extract Address"])
logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
# POST /api/extract-address
# Decode image → Gemini with retry/backoff → address text
# ─────────────────────────────────────────────

@router.post("/extract-address", response_model=ExtractAddressResponse)
async def extract_address_route(request: ExtractAddressRequest) -> ExtractAddressResponse:
    try:
        address = await extract_address(request.image)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except MaxRetriesReached:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Model temporarily unavailable. Please try again later.",
        )
    except Exception:
        logger.exception("Error processing image")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process image",
        )

    return ExtractAddressResponse(address=address)
