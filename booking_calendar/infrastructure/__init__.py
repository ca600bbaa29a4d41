"""
Инфраструктурный слой: HTTP-адаптеры, хранилище в памяти и логгер.
"""

from .console_logger import ConsoleLogger
from .http_api import HttpBookingApi, HttpClient, HttpUserDirectory
from .in_memory import InMemoryBookingApi, InMemoryBookingBackend, InMemoryUserDirectory

__all__ = [
    "ConsoleLogger",
    "HttpBookingApi",
    "HttpClient",
    "HttpUserDirectory",
    "InMemoryBookingApi",
    "InMemoryBookingBackend",
    "InMemoryUserDirectory",
]
