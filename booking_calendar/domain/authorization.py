"""
Права участников бронирования.
"""

from typing import List, Union

from .booking import Booking
from .value_objects import BookingAction, Role, UserId

_ACTIONS_BY_ROLE = {
    Role.RECIPIENT: (BookingAction.ACCEPT, BookingAction.REJECT),
    Role.REQUESTER: (BookingAction.CANCEL,),
    Role.NONE: (),
}


class AuthorizationPolicy:
    """Единственный источник правил о том, кто может действовать над бронированием.

    Получатель принимает или отклоняет запрос, инициатор может его отменить.
    Все остальные сочетания запрещены. Методы не имеют побочных эффектов.
    """

    @staticmethod
    def role_of(actor_id: UserId, booking: Booking) -> Role:
        if actor_id == booking.recipient_id:
            return Role.RECIPIENT
        if actor_id == booking.requester_id:
            return Role.REQUESTER
        return Role.NONE

    @classmethod
    def permits(
        cls, actor_id: UserId, booking: Booking, action: Union[BookingAction, str]
    ) -> bool:
        parsed = BookingAction.parse(action)
        if parsed is None:
            return False
        return parsed in _ACTIONS_BY_ROLE[cls.role_of(actor_id, booking)]

    @classmethod
    def allowed_actions(cls, actor_id: UserId, booking: Booking) -> List[BookingAction]:
        """Действия, доступные участнику прямо сейчас."""
        if not booking.is_pending:
            return []
        return list(_ACTIONS_BY_ROLE[cls.role_of(actor_id, booking)])
