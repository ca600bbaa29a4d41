"""
Реализации портов в памяти.

`InMemoryBookingBackend` играет роль авторитетного хранилища: изменения
статуса применяются под блокировкой и проверяют статус `requested`
в момент применения, поэтому из двух конкурирующих участников
выигрывает ровно один.
"""

import asyncio
from typing import Dict, Iterable, List, Optional

from ..application.dto import CreateBookingRequest
from ..application.ports import ILogger
from ..domain import (
    Booking,
    BookingAction,
    BookingId,
    BookingStateMachine,
    BookingStatus,
    NotFoundError,
    User,
    UserId,
    ValidationError,
)
from .console_logger import ConsoleLogger


class InMemoryBookingBackend:
    """Хранилище бронирований в памяти."""

    def __init__(self, logger: Optional[ILogger] = None):
        self._bookings: Dict[BookingId, Booking] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()
        self._logger = logger or ConsoleLogger()

    def session(self, viewer_id: UserId) -> "InMemoryBookingApi":
        """API от имени пользователя."""
        return InMemoryBookingApi(self, viewer_id)

    def get(self, booking_id: BookingId) -> Optional[Booking]:
        return self._bookings.get(booking_id)

    def remove(self, booking_id: BookingId) -> None:
        self._bookings.pop(booking_id, None)

    def bookings_for(self, viewer_id: UserId) -> List[Booking]:
        return [b for b in self._bookings.values() if b.involves(viewer_id)]

    async def create(self, requester_id: UserId, request: CreateBookingRequest) -> Booking:
        async with self._lock:
            if requester_id == request.recipient_id:
                raise ValidationError("Нельзя отправить запрос на бронирование самому себе")

            booking = Booking(
                id=self._next_id,
                requester_id=requester_id,
                recipient_id=request.recipient_id,
                date=request.date,
                start_time=request.start_time,
                end_time=request.end_time,
                fee=request.fee,
                location=request.location,
                note=request.note,
                status=BookingStatus.REQUESTED,
            )
            self._bookings[booking.id] = booking
            self._next_id += 1

        self._logger.info("Бронирование сохранено", booking_id=booking.id)
        return booking

    async def update_status(
        self, actor_id: UserId, booking_id: BookingId, status: BookingStatus
    ) -> Booking:
        try:
            action = BookingAction.for_status(BookingStatus(status))
        except ValueError:
            raise ValidationError(f"Недопустимый статус: {status}")

        async with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                raise NotFoundError(
                    f"Бронирование {booking_id} не найдено", booking_id=booking_id
                )
            # Проверка статуса и запись выполняются атомарно
            updated = BookingStateMachine.transition(booking, actor_id, action)
            self._bookings[booking_id] = updated

        self._logger.info(
            "Статус бронирования сохранен",
            booking_id=booking_id,
            status=updated.status.value,
        )
        return updated


class InMemoryBookingApi:
    """Реализация IBookingApi поверх хранилища в памяти."""

    def __init__(self, backend: InMemoryBookingBackend, viewer_id: UserId):
        self._backend = backend
        self._viewer_id = viewer_id

    async def list_bookings(self) -> List[Booking]:
        return self._backend.bookings_for(self._viewer_id)

    async def create_booking(self, request: CreateBookingRequest) -> Booking:
        return await self._backend.create(self._viewer_id, request)

    async def update_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        return await self._backend.update_status(self._viewer_id, booking_id, status)


class InMemoryUserDirectory:
    """Справочник пользователей в памяти."""

    def __init__(self, users: Iterable[User] = ()):
        self._users: Dict[UserId, User] = {user.id: user for user in users}

    def add(self, user: User) -> None:
        self._users[user.id] = user

    async def get_user(self, user_id: UserId) -> User:
        if user_id not in self._users:
            raise NotFoundError(f"Пользователь {user_id} не найден")
        return self._users[user_id]
