"""
Интерфейсы (порты) для внешних зависимостей.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Protocol

from ..domain import Booking, BookingId, BookingStatus, User, UserId

if TYPE_CHECKING:
    from .dto import CreateBookingRequest


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class IBookingApi(Protocol):
    """API бронирований, ограниченный текущим пользователем сессии."""

    async def list_bookings(self) -> List[Booking]: ...
    async def create_booking(self, request: CreateBookingRequest) -> Booking: ...
    async def update_status(
        self, booking_id: BookingId, status: BookingStatus
    ) -> Booking: ...


class IUserDirectory(Protocol):
    """Справочник пользователей (только для отображения)."""

    async def get_user(self, user_id: UserId) -> User: ...
