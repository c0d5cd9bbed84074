"""Health check data models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: Literal["healthy"] = "healthy"
    version: str
    timestamp: datetime
