"""
Base models for API requests and responses.

Request bodies reject unknown fields so a misspelled counter (say
totalCardsStudied) fails with 422 instead of silently leveling as zero.
Response models ignore extras so services can build them from wider dicts.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StrictRequest(BaseModel):
    """
    Base model for request bodies.

    Subclasses that set their own model_config (e.g. frozen=True) keep
    these settings; pydantic merges the two.
    """

    model_config = ConfigDict(
        extra="forbid",  # Reject unknown fields
        validate_default=True,  # Defaults pass through field validators too
        str_strip_whitespace=True,
    )


class StrictResponse(BaseModel):
    """Base model for response bodies. Extra fields are dropped."""

    model_config = ConfigDict(
        extra="ignore",
        validate_default=True,
    )


class ErrorDetail(StrictResponse):
    """Body returned for every handled error, see middleware.error_handling."""

    error: str  # Error code (e.g., "validation_error")
    message: str  # Human-readable message
    error_id: str  # Correlation ID for log lookup
    details: Optional[dict] = None  # Additional context, debug mode only
    timestamp: datetime
