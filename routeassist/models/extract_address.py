from pydantic import BaseModel, Field


class ExtractAddressRequest(BaseModel):
    image: str = Field(
        ...,
        min_length=1,
        description="Image encoded as a data URI, e.g. 'data:image/jpeg;base64,...'.",
    )


class ExtractAddressResponse(BaseModel):
    address: str
