from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class CreatedResponse(BaseModel):
    message: str
    id: str


class HealthResponse(BaseModel):
    status: str
