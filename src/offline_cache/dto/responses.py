"""Response DTOs for the control endpoints."""

from pydantic import BaseModel, Field


class WorkerMessageResponse(BaseModel):
    """Response DTO for a posted control message."""

    accepted: bool = Field(..., description="Whether the message was recognised and acted upon")
    state: str = Field(..., description="Lifecycle state after handling the message")


class WorkerStatusResponse(BaseModel):
    """Response DTO for worker status."""

    version: str = Field(..., description="Cache version suffix of the partitions")
    state: str = Field(..., description="Lifecycle state")
    controlling: bool = Field(..., description="Whether requests are being intercepted")
    partitions: dict[str, int] = Field(
        default_factory=dict,
        description="Entry count per current partition",
    )
    pending_revalidations: int = Field(0, description="Background refreshes in flight", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    storage_healthy: bool = Field(..., description="Whether the cache storage is reachable")
    state: str = Field(..., description="Lifecycle state")
