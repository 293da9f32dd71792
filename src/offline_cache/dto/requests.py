"""Request DTOs for the control endpoints."""

from pydantic import BaseModel, Field


class WorkerMessageRequest(BaseModel):
    """Control message posted by the page.

    Only {"type": "SKIP_WAITING"} is acted upon; other types are accepted
    by the endpoint and ignored.
    """

    type: str = Field(..., description="Message type, e.g. SKIP_WAITING", min_length=1)

    model_config = {"extra": "allow"}
