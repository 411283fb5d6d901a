"""Health probe schemas."""

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    service: str
    version: str


class ProbeResponse(BaseModel):
    status: str
