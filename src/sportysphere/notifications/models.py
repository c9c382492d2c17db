"""Data models for toast notifications."""

from enum import Enum

from pydantic import BaseModel, Field


class ToastLevel(str, Enum):
    """Visual category of a toast."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Toast(BaseModel):
    """A transient notification shown to the user."""

    id: int = Field(description="Monotonic identifier within the queue")
    message: str
    level: ToastLevel = ToastLevel.SUCCESS
    created_ms: float = Field(default=0.0, description="Clock time when shown")

    model_config = {"frozen": True}
