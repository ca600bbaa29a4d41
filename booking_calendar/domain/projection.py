"""
Календарное представление бронирований.

Проекция превращает бронирования в события календаря, а окно
просмотра (месяц/неделя/день) лишь определяет, какие из них видны.
Смена окна никогда не меняет сами события.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict

from .booking import Booking
from .exceptions import NotFoundError
from .value_objects import (
    BookingId,
    BookingStatus,
    CalendarView,
    NavigateAction,
    StatusCategory,
    today as current_day,
)

DEFAULT_PLACEHOLDER_TITLE = "Запрос на бронирование"
DAY_START = time(0, 0)
DAY_END = time(23, 59)
SUNDAY = 6

_STATUS_CATEGORIES = {
    BookingStatus.REQUESTED: StatusCategory.PENDING,
    BookingStatus.ACCEPTED: StatusCategory.CONFIRMED,
    BookingStatus.REJECTED: StatusCategory.DECLINED,
    BookingStatus.CANCELLED: StatusCategory.WITHDRAWN,
}

_STEPS = {
    CalendarView.MONTH: relativedelta(months=1),
    CalendarView.WEEK: relativedelta(weeks=1),
    CalendarView.DAY: relativedelta(days=1),
}


@dataclass(frozen=True)
class CalendarDay:
    """Ячейка сетки календаря."""

    date: date
    is_today: bool
    in_focus_month: bool


@dataclass(frozen=True)
class ViewWindow:
    """Отображаемый диапазон календаря, вычисляемый из даты фокуса."""

    view: CalendarView
    focus_date: date
    week_start: int = SUNDAY  # date.weekday(): понедельник = 0

    def _start_of_week(self, day: date) -> date:
        return day - timedelta(days=(day.weekday() - self.week_start) % 7)

    @property
    def range(self) -> Tuple[date, date]:
        """Первый и последний день окна включительно."""
        if self.view == CalendarView.MONTH:
            first = self.focus_date.replace(day=1)
            last = first + relativedelta(months=1, days=-1)
            return self._start_of_week(first), self._start_of_week(last) + timedelta(days=6)
        if self.view == CalendarView.WEEK:
            start = self._start_of_week(self.focus_date)
            return start, start + timedelta(days=6)
        return self.focus_date, self.focus_date

    def navigate(
        self,
        action: NavigateAction,
        target: Optional[date] = None,
        today: Optional[date] = None,
    ) -> "ViewWindow":
        """Возвращает новое окно; исходное не изменяется."""
        if action == NavigateAction.PREV:
            return replace(self, focus_date=self.focus_date - _STEPS[self.view])
        if action == NavigateAction.NEXT:
            return replace(self, focus_date=self.focus_date + _STEPS[self.view])
        if action == NavigateAction.TODAY:
            return replace(self, focus_date=today or current_day())
        if target is None:
            raise ValueError("Для перехода к дате нужно указать дату")
        return replace(self, focus_date=target)

    def with_view(self, view: CalendarView) -> "ViewWindow":
        return replace(self, view=view)

    def intersects(self, start: datetime, end: datetime) -> bool:
        first, last = self.range
        return start.date() <= last and end.date() >= first

    def days(self, today: Optional[date] = None) -> List[CalendarDay]:
        """Дни окна с отметкой сегодняшнего дня."""
        today = today or current_day()
        first, last = self.range
        result = []
        day = first
        while day <= last:
            result.append(
                CalendarDay(
                    date=day,
                    is_today=day == today,
                    in_focus_month=(day.year, day.month)
                    == (self.focus_date.year, self.focus_date.month),
                )
            )
            day += timedelta(days=1)
        return result


class CalendarEvent(BaseModel):
    """Событие календаря, построенное из одного бронирования."""

    model_config = ConfigDict(frozen=True)

    title: str
    start: datetime
    end: datetime
    all_day: bool
    # Ссылка только для поиска исходного бронирования
    booking_id: BookingId
    status_category: StatusCategory


class CalendarProjector:
    """Превращает бронирования в события календаря."""

    def __init__(self, placeholder_title: str = DEFAULT_PLACEHOLDER_TITLE):
        self.placeholder_title = placeholder_title

    @staticmethod
    def status_category(status: Union[BookingStatus, str]) -> StatusCategory:
        try:
            return _STATUS_CATEGORIES[BookingStatus(status)]
        except ValueError:
            return StatusCategory.NEUTRAL

    def to_event(self, booking: Booking) -> CalendarEvent:
        location = (booking.location or "").strip()
        if booking.is_all_day:
            start_time, end_time = DAY_START, DAY_END
        else:
            start_time, end_time = booking.start_time, booking.end_time or DAY_END
        start = datetime.combine(booking.date, start_time)
        end = datetime.combine(booking.date, end_time)
        if end < start:
            # Ночное бронирование заканчивается на следующий день
            end += timedelta(days=1)
        return CalendarEvent(
            title=location or self.placeholder_title,
            start=start,
            end=end,
            all_day=booking.is_all_day,
            booking_id=booking.id,
            status_category=self.status_category(booking.status),
        )

    def project(
        self, bookings: Iterable[Booking], window: Optional[ViewWindow] = None
    ) -> List[CalendarEvent]:
        """Одно событие на каждое бронирование, без слияния пересечений.

        Окно только отбирает события, пересекающие его диапазон; сами
        события от окна не зависят.
        """
        events = [self.to_event(booking) for booking in bookings]
        events.sort(key=lambda event: (event.start, event.booking_id))
        if window is None:
            return events
        return self.events_in(window, events)

    @staticmethod
    def events_in(
        window: ViewWindow, events: Iterable[CalendarEvent]
    ) -> List[CalendarEvent]:
        """События, попадающие в окно просмотра."""
        return [event for event in events if window.intersects(event.start, event.end)]

    @staticmethod
    def select_slot(slot_start: Union[date, datetime]) -> date:
        """Выбор пустого слота дает день для нового запроса."""
        if isinstance(slot_start, datetime):
            return slot_start.date()
        return slot_start

    @staticmethod
    def select_event(event: CalendarEvent, bookings: Sequence[Booking]) -> Booking:
        """Выбор события возвращает исходное бронирование."""
        for booking in bookings:
            if booking.id == event.booking_id:
                return booking
        raise NotFoundError(
            f"Бронирование {event.booking_id} не найдено", booking_id=event.booking_id
        )
