"""
Конечный автомат статусов бронирования.

    requested --accept--> accepted
    requested --reject--> rejected
    requested --cancel--> cancelled

Все статусы, кроме `requested`, конечные.
"""

from typing import Union

from .authorization import AuthorizationPolicy
from .booking import Booking
from .exceptions import AuthorizationError, StateError
from .value_objects import BookingAction, UserId


class BookingStateMachine:
    """Проверяет и применяет переходы статуса одного бронирования."""

    @staticmethod
    def transition(
        booking: Booking, actor_id: UserId, action: Union[BookingAction, str]
    ) -> Booking:
        """Применяет действие и возвращает обновленное бронирование."""
        if booking.status.is_terminal:
            raise StateError(
                f"Невозможно изменить бронирование {booking.id} в статусе {booking.status.value}"
            )

        if not AuthorizationPolicy.permits(actor_id, booking, action):
            name = action.value if isinstance(action, BookingAction) else action
            raise AuthorizationError(
                f"Пользователь {actor_id} не может выполнить действие {name} "
                f"над бронированием {booking.id}"
            )

        return booking.with_status(BookingAction(action).target_status)

    @classmethod
    def can_transition(
        cls, booking: Booking, actor_id: UserId, action: Union[BookingAction, str]
    ) -> bool:
        return booking.is_pending and AuthorizationPolicy.permits(
            actor_id, booking, action
        )
