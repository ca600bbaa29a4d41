"""
Клиентский кэш бронирований с оптимистичными изменениями.
"""

import itertools
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterator, List, Optional, Sequence, Set, Tuple, Union

from ..domain import (
    Booking,
    BookingAction,
    BookingId,
    BookingPolicy,
    BookingStateMachine,
    DomainException,
    MutationInProgressError,
    NotFoundError,
    StateError,
    UserId,
    today,
)
from .dto import CreateBookingRequest
from .ports import IBookingApi, ILogger


@dataclass(frozen=True)
class PendingMutation:
    """Снимки кэша до и после оптимистичной вставки."""

    provisional_id: BookingId
    before: Tuple[Booking, ...]
    after: Tuple[Booking, ...]

    @classmethod
    def insert(cls, cache: Sequence[Booking], provisional: Booking) -> "PendingMutation":
        before = tuple(cache)
        return cls(
            provisional_id=provisional.id,
            before=before,
            after=before + (provisional,),
        )

    def confirm(
        self, current: Sequence[Booking], confirmed: Booking
    ) -> Tuple[Booking, ...]:
        """Заменяет временную запись серверной на том же месте."""
        return tuple(
            confirmed if booking.id == self.provisional_id else booking
            for booking in current
        )

    def revert(self, current: Sequence[Booking]) -> Tuple[Booking, ...]:
        """Откатывает вставку.

        Если кэш не менялся с момента вставки, возвращается точный снимок `before`;
        иначе удаляется только временная запись.
        """
        if tuple(current) == self.after:
            return self.before
        return tuple(b for b in current if b.id != self.provisional_id)


class BookingStore:
    """Кэш бронирований текущего пользователя."""

    def __init__(
        self,
        api: IBookingApi,
        logger: ILogger,
        clock: Callable[[], date] = today,
    ):
        self._api = api
        self._logger = logger
        self._clock = clock
        self._bookings: List[Booking] = []
        self._in_flight: Set[BookingId] = set()
        self._temp_ids = itertools.count(-1, -1)
        self._viewer_id: Optional[UserId] = None

    @property
    def bookings(self) -> Tuple[Booking, ...]:
        return tuple(self._bookings)

    @property
    def is_creating(self) -> bool:
        return any(ref < 0 for ref in self._in_flight)

    def is_pending(self, booking_id: BookingId) -> bool:
        """Выполняется ли сейчас изменение этого бронирования."""
        return booking_id in self._in_flight

    def get(self, booking_id: BookingId) -> Booking:
        for booking in self._bookings:
            if booking.id == booking_id:
                return booking
        raise NotFoundError(f"Бронирование {booking_id} не найдено", booking_id=booking_id)

    @contextmanager
    def _mutation(self, booking_id: BookingId) -> Iterator[None]:
        if booking_id in self._in_flight:
            raise MutationInProgressError(
                f"Изменение бронирования {booking_id} уже выполняется"
            )
        self._in_flight.add(booking_id)
        try:
            yield
        finally:
            self._in_flight.discard(booking_id)

    async def list_bookings(self, viewer_id: UserId) -> List[Booking]:
        """Загружает бронирования, в которых участвует пользователь."""
        bookings = await self._api.list_bookings()
        self._viewer_id = viewer_id
        self._bookings = [b for b in bookings if b.involves(viewer_id)]
        self._logger.debug(
            "Бронирования загружены", viewer_id=viewer_id, count=len(self._bookings)
        )
        return list(self._bookings)

    async def create_booking(
        self, request: CreateBookingRequest, requester_id: UserId
    ) -> Booking:
        """Создает бронирование с оптимистичной вставкой в кэш."""
        BookingPolicy.validate_request(
            requester_id=requester_id,
            recipient_id=request.recipient_id,
            requested_date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            today=self._clock(),
        )

        provisional = Booking.provisional(
            next(self._temp_ids),
            requester_id=requester_id,
            recipient_id=request.recipient_id,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            fee=request.fee,
            location=request.location,
            note=request.note,
        )
        mutation = PendingMutation.insert(self._bookings, provisional)
        self._bookings = list(mutation.after)

        with self._mutation(provisional.id):
            try:
                created = await self._api.create_booking(request)
            except Exception as e:
                self._bookings = list(mutation.revert(self._bookings))
                self._logger.warning(
                    "Не удалось создать бронирование, кэш восстановлен",
                    provisional_id=provisional.id,
                    error=str(e),
                )
                raise

        self._bookings = list(mutation.confirm(self._bookings, created))
        self._logger.info(
            "Бронирование создано",
            booking_id=created.id,
            requester_id=created.requester_id,
            recipient_id=created.recipient_id,
        )
        await self._refresh_after_mutation()
        return created

    async def apply_transition(
        self,
        booking_id: BookingId,
        actor_id: UserId,
        action: Union[BookingAction, str],
    ) -> Booking:
        """Принимает, отклоняет или отменяет бронирование."""
        with self._mutation(booking_id):
            booking = self.get(booking_id)
            target = BookingStateMachine.transition(booking, actor_id, action)

            try:
                confirmed = await self._api.update_status(booking_id, target.status)
            except NotFoundError:
                self._bookings = [b for b in self._bookings if b.id != booking_id]
                self._logger.warning(
                    "Бронирование больше не существует, удалено из кэша",
                    booking_id=booking_id,
                )
                raise
            except StateError:
                # Статус уже изменен другим участником
                self._logger.warning(
                    "Статус бронирования изменился на сервере, кэш обновляется",
                    booking_id=booking_id,
                )
                await self._refresh_after_mutation()
                raise

            self._bookings = [
                confirmed if b.id == booking_id else b for b in self._bookings
            ]
            self._logger.info(
                "Статус бронирования изменен",
                booking_id=booking_id,
                actor_id=actor_id,
                status=confirmed.status.value,
            )
        await self._refresh_after_mutation()
        return confirmed

    async def _refresh_after_mutation(self) -> None:
        if self._viewer_id is None:
            return
        try:
            await self.list_bookings(self._viewer_id)
        except DomainException as e:
            # Кэш остается в последнем известном состоянии
            self._logger.warning(
                "Не удалось обновить список бронирований",
                error=str(e),
                error_type=type(e).__name__,
            )
