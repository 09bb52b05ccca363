"""Pydantic models for API I/O."""

from .messages import CreatedResponse, HealthResponse, MessageResponse

__all__ = [
    "CreatedResponse",
    "HealthResponse",
    "MessageResponse",
]
