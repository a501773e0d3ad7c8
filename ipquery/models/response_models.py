from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class SelfIPResponse(BaseModel):
    """Response model for the own public IP endpoint."""

    ip: str
