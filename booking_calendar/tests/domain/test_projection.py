import datetime as dt

import pytest

from booking_calendar.domain import (
    BookingStatus,
    CalendarProjector,
    CalendarView,
    NavigateAction,
    NotFoundError,
    StatusCategory,
    ViewWindow,
)
from booking_calendar.domain.projection import DEFAULT_PLACEHOLDER_TITLE

from ..factories import TODAY, make_booking


@pytest.fixture
def projector():
    return CalendarProjector()


@pytest.fixture
def march():
    return ViewWindow(view=CalendarView.MONTH, focus_date=dt.date(2025, 3, 10))


# Тесты проекции


def test_timed_booking_projection(projector):
    event = projector.to_event(make_booking())

    assert event.title == "Клуб «Север»"
    assert event.start == dt.datetime(2025, 3, 10, 18, 0)
    assert event.end == dt.datetime(2025, 3, 10, 21, 0)
    assert event.all_day is False
    assert event.booking_id == 1
    assert event.status_category == StatusCategory.PENDING


def test_all_day_booking_projection(projector):
    """Тест: бронирование без времени начала занимает весь день."""
    booking = make_booking(start_time=None, end_time=None)

    event = projector.to_event(booking)

    assert event.all_day is True
    assert event.start == dt.datetime(2025, 3, 10, 0, 0)
    assert event.end == dt.datetime(2025, 3, 10, 23, 59)


def test_end_time_is_ignored_for_all_day_booking(projector):
    event = projector.to_event(make_booking(start_time=None, end_time=dt.time(15, 0)))

    assert event.all_day is True
    assert event.end == dt.datetime(2025, 3, 10, 23, 59)


def test_missing_end_time_runs_until_end_of_day(projector):
    event = projector.to_event(make_booking(end_time=None))

    assert event.start == dt.datetime(2025, 3, 10, 18, 0)
    assert event.end == dt.datetime(2025, 3, 10, 23, 59)


@pytest.mark.parametrize("location", [None, "", "   "])
def test_placeholder_title(projector, location):
    event = projector.to_event(make_booking(location=location))

    assert event.title == DEFAULT_PLACEHOLDER_TITLE


def test_custom_placeholder_title():
    projector = CalendarProjector(placeholder_title="Без названия")

    assert projector.to_event(make_booking(location=None)).title == "Без названия"


def test_one_event_per_booking_without_merging(projector):
    """Тест: пересекающиеся бронирования не сливаются и не отбрасываются."""
    bookings = [
        make_booking(id=1),
        make_booking(id=2),
        make_booking(id=3, date=dt.date(2025, 3, 5), start_time=None, end_time=None),
    ]

    events = projector.project(bookings)

    assert len(events) == len(bookings)
    assert {e.booking_id for e in events} == {1, 2, 3}
    assert [e.booking_id for e in events] == [3, 1, 2]


def test_projection_is_independent_of_the_window(projector, march):
    """Тест: смена окна не меняет и не теряет события."""
    bookings = [make_booking(id=1), make_booking(id=2, date=dt.date(2025, 6, 1))]
    events = projector.project(bookings)

    june = march.navigate(NavigateAction.DATE, target=dt.date(2025, 6, 1))

    assert [e.booking_id for e in projector.events_in(march, events)] == [1]
    assert [e.booking_id for e in projector.events_in(june, events)] == [2]
    assert projector.project(bookings) == events


def test_project_with_window_filters_without_changing_events(projector, march):
    bookings = [make_booking(id=1), make_booking(id=2, date=dt.date(2025, 6, 1))]

    in_march = projector.project(bookings, march)

    assert [e.booking_id for e in in_march] == [1]
    assert in_march[0] == projector.to_event(bookings[0])


def test_overnight_booking_ends_next_day(projector):
    """Тест: выступление 22:00-03:00 занимает два календарных дня."""
    booking = make_booking(start_time=dt.time(22, 0), end_time=dt.time(3, 0))

    event = projector.to_event(booking)

    assert event.start == dt.datetime(2025, 3, 10, 22, 0)
    assert event.end == dt.datetime(2025, 3, 11, 3, 0)


@pytest.mark.parametrize(
    "status, category",
    [
        (BookingStatus.REQUESTED, StatusCategory.PENDING),
        (BookingStatus.ACCEPTED, StatusCategory.CONFIRMED),
        (BookingStatus.REJECTED, StatusCategory.DECLINED),
        (BookingStatus.CANCELLED, StatusCategory.WITHDRAWN),
        ("archived", StatusCategory.NEUTRAL),
    ],
)
def test_status_category(status, category):
    assert CalendarProjector.status_category(status) == category


def test_status_categories_are_distinct():
    categories = {CalendarProjector.status_category(s) for s in BookingStatus}

    assert len(categories) == 4
    assert StatusCategory.NEUTRAL not in categories


# Тесты окна просмотра


def test_month_window_covers_full_weeks(march):
    assert march.range == (dt.date(2025, 2, 23), dt.date(2025, 4, 5))


def test_week_window():
    window = ViewWindow(view=CalendarView.WEEK, focus_date=dt.date(2025, 3, 10))

    assert window.range == (dt.date(2025, 3, 9), dt.date(2025, 3, 15))
    assert window.with_view(CalendarView.DAY).range == (
        dt.date(2025, 3, 10),
        dt.date(2025, 3, 10),
    )


def test_week_window_starting_on_monday():
    window = ViewWindow(view=CalendarView.WEEK, focus_date=dt.date(2025, 3, 10), week_start=0)

    assert window.range == (dt.date(2025, 3, 10), dt.date(2025, 3, 16))


def test_navigation_is_pure(march):
    following = march.navigate(NavigateAction.NEXT)

    assert following.focus_date == dt.date(2025, 4, 10)
    assert march.focus_date == dt.date(2025, 3, 10)
    assert following.navigate(NavigateAction.PREV) == march


def test_month_navigation_clamps_day():
    window = ViewWindow(view=CalendarView.MONTH, focus_date=dt.date(2025, 1, 31))

    assert window.navigate(NavigateAction.NEXT).focus_date == dt.date(2025, 2, 28)


def test_navigate_week_day_and_today():
    week = ViewWindow(view=CalendarView.WEEK, focus_date=dt.date(2025, 3, 10))

    assert week.navigate(NavigateAction.NEXT).focus_date == dt.date(2025, 3, 17)
    assert week.with_view(CalendarView.DAY).navigate(NavigateAction.PREV).focus_date == (
        dt.date(2025, 3, 9)
    )
    assert week.navigate(NavigateAction.TODAY, today=TODAY).focus_date == TODAY


def test_navigate_to_date_requires_target(march):
    with pytest.raises(ValueError):
        march.navigate(NavigateAction.DATE)


def test_days_highlight_today(march):
    days = march.days(today=TODAY)

    assert len(days) == 42
    assert [d.date for d in days if d.is_today] == [TODAY]
    assert sum(d.in_focus_month for d in days) == 31


# Тесты выбора


def test_select_slot_returns_day():
    assert CalendarProjector.select_slot(dt.datetime(2025, 3, 12, 15, 30)) == dt.date(2025, 3, 12)
    assert CalendarProjector.select_slot(dt.date(2025, 3, 12)) == dt.date(2025, 3, 12)


def test_select_event_returns_cached_booking(projector):
    bookings = [make_booking(id=1), make_booking(id=2, note="Со своим оборудованием")]
    event = projector.to_event(bookings[1])

    assert projector.select_event(event, bookings) is bookings[1]


def test_select_event_for_missing_booking(projector):
    event = projector.to_event(make_booking(id=9))

    with pytest.raises(NotFoundError):
        projector.select_event(event, [make_booking(id=1)])
