"""Configuration for the interaction core.

Centralizes magic numbers and exposes validated configuration models.
The core components take these models directly; only the CLI reads them
from the environment.
"""

import os
from enum import IntEnum

from pydantic import BaseModel, Field, model_validator


class LogLevel(IntEnum):
    """Debug callback levels, ordered so lower values are more verbose."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def parse(cls, text: str) -> "LogLevel":
        """Level for a callback level string. Unknown names map to DEBUG."""
        return cls.__members__.get(text.upper(), cls.DEBUG)


# Pull-to-refresh gesture
REFRESH_THRESHOLD = 60.0  # Damped units the pull must exceed to commit
DAMPING_FACTOR = 0.5  # Raw pull distance multiplier for visual feedback
CONTENT_OFFSET_FACTOR = 0.5  # Feed translate relative to damped distance
CONTENT_OFFSET_MAX = 60.0  # Cap on the feed translate while pulling

# Simulated delivery (milliseconds)
SENT_DELAY_MS = 500
DELIVERED_DELAY_MS = 1000
TYPING_DELAY_MS = 0
REPLY_DELAY_MS = 2000

# Toasts and feed
TOAST_DURATION_MS = 3000
FEED_REFRESH_DELAY_MS = 500

# Simulated peer
DEFAULT_REPLY_TEXT = "Thanks for sharing! \U0001F44D"
LOCAL_SENDER_ID = "me"
LOCAL_SENDER_NAME = "You"

ENV_PREFIX = "SPORTYSPHERE_"


class GestureConfig(BaseModel):
    """Tuning for the pull-to-refresh recognizer."""

    threshold: float = Field(
        default=REFRESH_THRESHOLD,
        gt=0,
        description="Damped distance that must be exceeded on release"
    )
    damping_factor: float = Field(
        default=DAMPING_FACTOR,
        gt=0,
        le=1,
        description="Multiplier applied to the raw pull distance"
    )


class DeliveryTimings(BaseModel):
    """Delays used by the simulated delivery pipeline."""

    sent_delay_ms: int = Field(default=SENT_DELAY_MS, ge=0)
    delivered_delay_ms: int = Field(default=DELIVERED_DELAY_MS, ge=0)
    typing_delay_ms: int = Field(default=TYPING_DELAY_MS, ge=0)
    reply_delay_ms: int = Field(default=REPLY_DELAY_MS, ge=0)

    @model_validator(mode="after")
    def _check_ordering(self) -> "DeliveryTimings":
        if self.delivered_delay_ms <= self.sent_delay_ms:
            raise ValueError("delivered_delay_ms must be greater than sent_delay_ms")
        if self.reply_delay_ms <= self.typing_delay_ms:
            raise ValueError("reply_delay_ms must be greater than typing_delay_ms")
        return self


class AppConfig(BaseModel):
    """Complete configuration for the demo application."""

    gesture: GestureConfig = Field(default_factory=GestureConfig)
    delivery: DeliveryTimings = Field(default_factory=DeliveryTimings)
    toast_duration_ms: int = Field(default=TOAST_DURATION_MS, ge=0)
    feed_refresh_delay_ms: int = Field(default=FEED_REFRESH_DELAY_MS, ge=0)


def load_config() -> AppConfig:
    """Build configuration from environment variables.

    Returns:
        Validated application configuration

    Raises:
        pydantic.ValidationError: If a value is out of range

    Environment variables:
        SPORTYSPHERE_REFRESH_THRESHOLD: Refresh threshold (default: 60)
        SPORTYSPHERE_DAMPING_FACTOR: Damping factor (default: 0.5)
        SPORTYSPHERE_SENT_DELAY_MS: Delay before "sent" (default: 500)
        SPORTYSPHERE_DELIVERED_DELAY_MS: Delay before "delivered" (default: 1000)
        SPORTYSPHERE_TYPING_DELAY_MS: Delay before typing shows (default: 0)
        SPORTYSPHERE_REPLY_DELAY_MS: Delay before the reply (default: 2000)
        SPORTYSPHERE_TOAST_DURATION_MS: Toast lifetime (default: 3000)
        SPORTYSPHERE_FEED_REFRESH_DELAY_MS: Simulated feed reload (default: 500)
    """
    from dotenv import load_dotenv

    load_dotenv()

    def _env(name: str, default: float | int) -> str:
        return os.getenv(f"{ENV_PREFIX}{name}", str(default))

    return AppConfig(
        gesture=GestureConfig(
            threshold=float(_env("REFRESH_THRESHOLD", REFRESH_THRESHOLD)),
            damping_factor=float(_env("DAMPING_FACTOR", DAMPING_FACTOR)),
        ),
        delivery=DeliveryTimings(
            sent_delay_ms=int(_env("SENT_DELAY_MS", SENT_DELAY_MS)),
            delivered_delay_ms=int(_env("DELIVERED_DELAY_MS", DELIVERED_DELAY_MS)),
            typing_delay_ms=int(_env("TYPING_DELAY_MS", TYPING_DELAY_MS)),
            reply_delay_ms=int(_env("REPLY_DELAY_MS", REPLY_DELAY_MS)),
        ),
        toast_duration_ms=int(_env("TOAST_DURATION_MS", TOAST_DURATION_MS)),
        feed_refresh_delay_ms=int(_env("FEED_REFRESH_DELAY_MS", FEED_REFRESH_DELAY_MS)),
    )
