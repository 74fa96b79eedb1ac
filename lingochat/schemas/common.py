"""Small shared response schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """GET /api/health response body."""

    status: str = "ok"
