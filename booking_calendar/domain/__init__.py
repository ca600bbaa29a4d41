"""
Доменный слой: бронирование, права участников, автомат статусов,
календарная проекция и фильтрация.
"""

from .authorization import AuthorizationPolicy
from .booking import Booking, BookingPolicy, User
from .exceptions import (
    AuthorizationError,
    DomainException,
    MutationInProgressError,
    NetworkError,
    NotFoundError,
    StateError,
    ValidationError,
)
from .filtering import (
    ApplicableToggles,
    BookingFilterView,
    FilterToggles,
    applicable_toggles,
    default_toggles,
)
from .projection import CalendarDay, CalendarEvent, CalendarProjector, ViewWindow
from .state_machine import BookingStateMachine
from .value_objects import (
    BookingAction,
    BookingId,
    BookingStatus,
    CalendarView,
    NavigateAction,
    Role,
    StatusCategory,
    UserId,
    now,
    today,
)

__all__ = [
    # Сущности
    "Booking",
    "User",
    "BookingPolicy",
    # Правила и автомат
    "AuthorizationPolicy",
    "BookingStateMachine",
    # Календарь
    "CalendarDay",
    "CalendarEvent",
    "CalendarProjector",
    "ViewWindow",
    # Фильтрация
    "ApplicableToggles",
    "BookingFilterView",
    "FilterToggles",
    "applicable_toggles",
    "default_toggles",
    # Перечисления и типы
    "BookingAction",
    "BookingId",
    "BookingStatus",
    "CalendarView",
    "NavigateAction",
    "Role",
    "StatusCategory",
    "UserId",
    # Исключения
    "DomainException",
    "ValidationError",
    "AuthorizationError",
    "StateError",
    "NetworkError",
    "NotFoundError",
    "MutationInProgressError",
    # Утилиты
    "now",
    "today",
]
