"""
Общие фикстуры тестов.
"""

import pytest

from booking_calendar.infrastructure import InMemoryBookingBackend, InMemoryUserDirectory

from .factories import ANNA, IVAN, PETR


class RecordingLogger:
    """Логгер, запоминающий сообщения для проверок."""

    def __init__(self):
        self.records = []

    def _record(self, level, message, kwargs):
        self.records.append((level, message, kwargs))

    def info(self, message, **kwargs):
        self._record("INFO", message, kwargs)

    def debug(self, message, **kwargs):
        self._record("DEBUG", message, kwargs)

    def warning(self, message, **kwargs):
        self._record("WARNING", message, kwargs)

    def error(self, message, **kwargs):
        self._record("ERROR", message, kwargs)

    def messages(self, level):
        return [message for lvl, message, _ in self.records if lvl == level]


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def backend(logger):
    """Авторитетное хранилище бронирований в памяти."""
    return InMemoryBookingBackend(logger=logger)


@pytest.fixture
def users():
    return InMemoryUserDirectory([IVAN, PETR, ANNA])
