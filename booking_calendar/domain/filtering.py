"""
Фильтрация бронирований в зависимости от того, кто смотрит и чей календарь.
"""

from typing import Iterable, List

from pydantic import BaseModel, ConfigDict

from .booking import Booking
from .value_objects import UserId


class FilterToggles(BaseModel):
    """Переключатели "отправленные" / "полученные"."""

    model_config = ConfigDict(frozen=True)

    include_sent: bool = True
    include_received: bool = True


class ApplicableToggles(BaseModel):
    """Какие переключатели имеет смысл показывать."""

    model_config = ConfigDict(frozen=True)

    sent: bool
    received: bool


def default_toggles(is_own_calendar: bool) -> FilterToggles:
    """Значения переключателей по умолчанию.

    В чужом календаре "отправленные" неприменимы и выключены.
    """
    if is_own_calendar:
        return FilterToggles(include_sent=True, include_received=True)
    return FilterToggles(include_sent=False, include_received=True)


def applicable_toggles(is_own_calendar: bool) -> ApplicableToggles:
    return ApplicableToggles(sent=is_own_calendar, received=True)


class BookingFilterView:
    """Вычисляет видимое подмножество бронирований. Без ввода-вывода."""

    @staticmethod
    def visible(
        bookings: Iterable[Booking],
        viewer_id: UserId,
        calendar_owner_id: UserId,
        toggles: FilterToggles = FilterToggles(),
    ) -> List[Booking]:
        if viewer_id == calendar_owner_id:
            return [
                b
                for b in bookings
                if (toggles.include_sent and b.requester_id == viewer_id)
                or (toggles.include_received and b.recipient_id == viewer_id)
            ]

        # В чужом календаре видны только собственные запросы к его владельцу
        if not toggles.include_received:
            return []
        return [
            b
            for b in bookings
            if b.recipient_id == calendar_owner_id and b.requester_id == viewer_id
        ]
