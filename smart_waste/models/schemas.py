"""
Pydantic schemas for API requests and responses: health payloads, the
classification result, waste items and categories.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _as_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC; label them so clients do not read local time."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


# ---------------------------------------------------------------------------
# Common/Utility Schemas
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class HealthResponse(BaseModel):
    """Basic health response schema."""
    status: str = Field(..., description="Health status, e.g. 'OK'")
    message: str = Field(..., description="Human-readable status message")


# PUBLIC_INTERFACE
class MessageResponse(BaseModel):
    """Acknowledgement returned by update and delete endpoints."""
    message: str = Field(..., description="Outcome of the operation")


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """Envelope used for every error response."""
    error: str = Field(..., description="Error message")


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class Classification(BaseModel):
    """Label produced by a classifier for one image."""
    category: str = Field(..., description="Waste category label")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score in [0, 1]")
    description: str = Field(..., description="Human-readable explanation of the label")


# PUBLIC_INTERFACE
class ClassifyResponse(BaseModel):
    """Result of uploading and classifying an image."""
    id: int = Field(..., description="Identifier of the stored waste item")
    imageUrl: str = Field(..., description="Public URL of the stored image")
    classification: Classification
    timestamp: UtcDatetime = Field(..., description="Server timestamp of the record (UTC)")


# ---------------------------------------------------------------------------
# Waste Item Schemas
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class WasteItemOut(BaseModel):
    """A waste_items row as returned by the API."""
    id: int
    image_path: Optional[str] = None
    classification_result: Optional[str] = None
    confidence: Optional[float] = None
    category: Optional[str] = None
    timestamp: UtcDatetime

    model_config = ConfigDict(from_attributes=True)


# PUBLIC_INTERFACE
class WasteItemUpdate(BaseModel):
    """Correction payload; both fields are required by the handler."""
    category: Optional[str] = Field(default=None, description="Corrected category")
    classification_result: Optional[str] = Field(default=None, description="Corrected description")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"category": "glass", "classification_result": "Green glass bottle"}},
    )


# ---------------------------------------------------------------------------
# Category Schemas
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class CategoryIn(BaseModel):
    """Payload for creating or replacing a category; name is required by the handler."""
    name: Optional[str] = Field(default=None, description="Unique category name")
    description: Optional[str] = Field(default=None, description="Short description")
    recycling_guidelines: Optional[str] = Field(default=None, description="How to recycle this waste")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "e-waste",
                "description": "Discarded electronics",
                "recycling_guidelines": "Take to a certified e-waste drop-off point.",
            }
        },
    )


# PUBLIC_INTERFACE
class CategoryOut(BaseModel):
    """A categories row as returned by the API."""
    id: int
    name: str
    description: Optional[str] = None
    recycling_guidelines: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
