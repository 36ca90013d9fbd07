"""Health and error envelopes shared by all routes."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from enhanced_commerce import __version__
from enhanced_commerce.schemas.discount import DiscountValidation

HealthState = Literal["healthy", "unhealthy"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: HealthState = Field(default="healthy", description="Always healthy while the process serves requests")
    version: str = Field(default=__version__, description="Service version")
    timestamp: datetime = Field(default_factory=_utcnow)


class StoreCheck(BaseModel):
    """Outcome of querying the document store."""

    healthy: bool = Field(description="Whether a trivial query succeeded")
    latency_ms: float = Field(description="Round trip of the query")
    error: str | None = Field(default=None, description="Failure reason")


class ReadinessResponse(BaseModel):
    """Readiness payload; unhealthy when the store cannot be queried."""

    status: HealthState
    store: StoreCheck
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorDetail(BaseModel):
    """One machine-readable cause of a failed request."""

    field: str | None = Field(default=None, description="Request field the cause relates to")
    reason: str = Field(description="Stable reason code, e.g. a discount rejection reason")
    message: str = Field(description="User-facing explanation")

    @classmethod
    def from_validation(cls, field: str, validation: DiscountValidation) -> "ErrorDetail":
        """Describe a rejected discount code."""
        return cls(
            field=field,
            reason=validation.reason.value if validation.reason else "rejected",
            message=validation.message or "Discount code cannot be applied",
        )


class ErrorResponse(BaseModel):
    """Body of every error raised through the API error hierarchy."""

    error: str = Field(description="Error category: not_found, validation_error, conflict or internal_error")
    message: str
    details: list[ErrorDetail] | None = None
    timestamp: datetime = Field(default_factory=_utcnow)
