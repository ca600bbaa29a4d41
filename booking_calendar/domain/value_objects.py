"""
Общие типы значений контекста бронирования.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

# Идентификаторы выдаются сервером и являются целыми числами
UserId = int
BookingId = int


class BookingStatus(str, Enum):
    """Статусы бронирования."""

    REQUESTED = "requested"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not BookingStatus.REQUESTED


class BookingAction(str, Enum):
    """Действия над бронированием."""

    ACCEPT = "accept"
    REJECT = "reject"
    CANCEL = "cancel"

    @property
    def target_status(self) -> BookingStatus:
        """Конечный статус, к которому приводит действие."""
        return _ACTION_TARGETS[self]

    @classmethod
    def parse(cls, value: Union["BookingAction", str]) -> Optional["BookingAction"]:
        """Возвращает действие или None, если значение не распознано."""
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def for_status(cls, status: BookingStatus) -> "BookingAction":
        """Обратное отображение: статус из запроса PATCH -> действие."""
        for action, target in _ACTION_TARGETS.items():
            if target == status:
                return action
        raise ValueError(f"Статус {status} не является результатом действия")


_ACTION_TARGETS = {
    BookingAction.ACCEPT: BookingStatus.ACCEPTED,
    BookingAction.REJECT: BookingStatus.REJECTED,
    BookingAction.CANCEL: BookingStatus.CANCELLED,
}


class Role(str, Enum):
    """Роль пользователя относительно бронирования."""

    REQUESTER = "requester"
    RECIPIENT = "recipient"
    NONE = "none"


class StatusCategory(str, Enum):
    """Визуальная категория события в календаре."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    WITHDRAWN = "withdrawn"
    NEUTRAL = "neutral"


class CalendarView(str, Enum):
    """Режимы отображения календаря."""

    MONTH = "month"
    WEEK = "week"
    DAY = "day"


class NavigateAction(str, Enum):
    """Навигация по календарю."""

    PREV = "prev"
    NEXT = "next"
    TODAY = "today"
    DATE = "date"


def now() -> datetime:
    """Возвращает текущую дату и время."""
    return datetime.now()


def today() -> date:
    """Возвращает текущий календарный день (локальный)."""
    return date.today()
