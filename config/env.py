"""Environment-driven configuration.

Values are read from TICKETING_* environment variables or a local .env file
and consumed by config/settings.py.
"""

from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TicketingSettings(BaseSettings):
    """Deployment settings for the ticketing service."""

    secret_key: str = "dev-insecure-change-me"
    debug: bool = False
    allowed_hosts: str | list[str] = ["localhost", "127.0.0.1"]
    database_path: str = "db.sqlite3"
    time_zone: str = "Africa/Lagos"
    log_level: str = "INFO"

    # Purchases
    platform_fee: Decimal = Decimal("150")

    # Refund policy
    refund_fee: Decimal = Decimal("150")
    refund_opens_after_days: int = 2
    refund_closes_after_days: int = 7

    # Notifications
    notifications_enabled: bool = True
    redis_url: str = "redis://localhost:6379/0"
    notifications_queue: str = "notifications"
    support_email: str = "support@example.com"
    default_from_email: str = "no-reply@example.com"

    model_config = SettingsConfigDict(
        env_prefix="TICKETING_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("allowed_hosts", mode="before")
    @classmethod
    def _split_hosts(cls, v):
        if isinstance(v, str):
            return [h.strip() for h in v.split(",") if h.strip()]
        return v

    @field_validator("refund_closes_after_days")
    @classmethod
    def _window_is_ordered(cls, v, info):
        opens = info.data.get("refund_opens_after_days", 0)
        if v < opens:
            raise ValueError("refund window closes before it opens")
        return v


env = TicketingSettings()
