"""Data Transfer Objects for API contracts.

These Pydantic models define the external contract of the control
endpoints. Intercepted traffic is relayed as-is and has no DTOs.
"""

from .requests import WorkerMessageRequest
from .responses import HealthCheckResponse, WorkerMessageResponse, WorkerStatusResponse

__all__ = [
    "WorkerMessageRequest",
    "WorkerMessageResponse",
    "WorkerStatusResponse",
    "HealthCheckResponse",
]
