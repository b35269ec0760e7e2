"""
Pydantic response models for the API.

Field names are snake_case in Python and camelCase on the wire; FastAPI
serializes response models by alias.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AdvocateOut(BaseModel):
    """One advocate record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Opaque record identifier", examples=["17"])
    first_name: str = Field(..., description="Given name", examples=["Jane"])
    last_name: str = Field(..., description="Family name", examples=["Doe"])
    city: str = Field(..., description="City of practice", examples=["New York"])
    degree: str = Field(..., description="Credential", examples=["MD"])
    specialties: list[str] = Field(
        default_factory=list, description="Specialty tags in display order",
        examples=[["Bipolar", "LGBTQ"]],
    )
    years_of_experience: int = Field(..., ge=0, description="Years in practice", examples=[10])
    phone_number: str = Field(..., description="Contact phone number", examples=["5551234567"])


class AdvocatesResponse(BaseModel):
    """Response body for GET /api/advocates."""
    data: list[AdvocateOut] = Field(..., description="Every advocate in the directory")


class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Bad request"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[400])
