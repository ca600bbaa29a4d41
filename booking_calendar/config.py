"""
Настройки клиента, читаемые из переменных окружения.
"""

import os

from pydantic import BaseModel, Field

from .domain.projection import DEFAULT_PLACEHOLDER_TITLE, SUNDAY
from .infrastructure.http_api import DEFAULT_TIMEOUT


class ClientSettings(BaseModel):
    """Настройки клиента календаря бронирований."""

    api_base_url: str = "http://localhost:8000"
    request_timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    week_start: int = Field(SUNDAY, ge=0, le=6)
    placeholder_title: str = DEFAULT_PLACEHOLDER_TITLE
    log_debug: bool = False

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Читает BOOKING_* переменные; незаданные берутся по умолчанию."""
        values = {
            "api_base_url": os.getenv("BOOKING_API_URL"),
            "request_timeout": os.getenv("BOOKING_API_TIMEOUT"),
            "week_start": os.getenv("BOOKING_CALENDAR_WEEK_START"),
            "placeholder_title": os.getenv("BOOKING_CALENDAR_PLACEHOLDER"),
            "log_debug": os.getenv("BOOKING_LOG_DEBUG"),
        }
        return cls(**{key: value for key, value in values.items() if value})
