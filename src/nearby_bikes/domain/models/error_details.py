"""Error details domain model."""

from pydantic import BaseModel, ConfigDict


class ErrorDetails(BaseModel):
    """Serializable view of a failure, safe to hand to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    kind: str
    message: str
    user_message: str
    status_code: int | None = None
    timestamp: str
