"""
Тесты HTTP-адаптеров на подменном транспорте httpx.
"""

import datetime as dt
import json

import httpx
import pytest

from booking_calendar.application import CreateBookingRequest
from booking_calendar.domain import (
    AuthorizationError,
    BookingStatus,
    NetworkError,
    NotFoundError,
    StateError,
    ValidationError,
)
from booking_calendar.infrastructure import HttpBookingApi, HttpUserDirectory

BASE_URL = "http://testserver"

BOOKING_PAYLOAD = {
    "id": 7,
    "requester_id": 1,
    "recipient_id": 2,
    "date": "2025-03-10",
    "start_time": "18:00",
    "end_time": "21:00",
    "fee": None,
    "location": "Клуб «Север»",
    "status": "requested",
    "note": None,
    "created_at": "2025-03-01T10:00:00",
    "requester_displayname": "Иван Иванов",
}


def make_api(handler, api_class=HttpBookingApi):
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return api_class(BASE_URL, client=client)


async def test_list_bookings():
    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/bookings"
        return httpx.Response(200, json=[BOOKING_PAYLOAD])

    async with make_api(handler) as api:
        bookings = await api.list_bookings()

    assert len(bookings) == 1
    assert bookings[0].id == 7
    assert bookings[0].start_time == dt.time(18, 0)


async def test_create_booking_sends_wire_format():
    sent = {}

    def handler(request):
        sent.update(json.loads(request.content))
        return httpx.Response(201, json=BOOKING_PAYLOAD)

    request = CreateBookingRequest(
        recipient_id=2,
        date=dt.date(2025, 3, 10),
        start_time=dt.time(18, 0),
        end_time=dt.time(21, 0),
        location="Клуб «Север»",
    )
    async with make_api(handler) as api:
        created = await api.create_booking(request)

    assert sent == {
        "recipient_id": 2,
        "date": "2025-03-10",
        "start_time": "18:00",
        "end_time": "21:00",
        "fee": None,
        "location": "Клуб «Север»",
        "note": None,
    }
    assert created.status == BookingStatus.REQUESTED


async def test_update_status():
    def handler(request):
        assert request.method == "PATCH"
        assert request.url.path == "/bookings/7/status"
        assert json.loads(request.content) == {"status": "accepted"}
        return httpx.Response(200, json={**BOOKING_PAYLOAD, "status": "accepted"})

    async with make_api(handler) as api:
        updated = await api.update_status(7, BookingStatus.ACCEPTED)

    assert updated.status == BookingStatus.ACCEPTED


@pytest.mark.parametrize(
    "status_code, error_class",
    [
        (400, ValidationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (409, StateError),
        (500, NetworkError),
        (503, NetworkError),
    ],
)
async def test_error_mapping(status_code, error_class):
    def handler(request):
        return httpx.Response(status_code, json={"detail": "Booking is not pending"})

    async with make_api(handler) as api:
        with pytest.raises(error_class, match="Booking is not pending"):
            await api.update_status(7, BookingStatus.CANCELLED)


async def test_timeout_is_network_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with make_api(handler) as api:
        with pytest.raises(NetworkError, match="Превышено время ожидания"):
            await api.list_bookings()


async def test_connection_error_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_api(handler) as api:
        with pytest.raises(NetworkError):
            await api.create_booking(
                CreateBookingRequest(recipient_id=2, date=dt.date(2025, 3, 10))
            )


async def test_malformed_booking_is_rejected():
    """Тест: запись без recipient_id не попадает в кэш."""
    payload = {key: value for key, value in BOOKING_PAYLOAD.items() if key != "recipient_id"}

    def handler(request):
        return httpx.Response(200, json=[payload])

    async with make_api(handler) as api:
        with pytest.raises(NetworkError, match="Некорректные данные бронирования"):
            await api.list_bookings()


async def test_user_directory():
    def handler(request):
        assert request.url.path == "/users/2"
        return httpx.Response(
            200, json={"id": 2, "display_name": "Петр Петров", "email": "petr@example.com"}
        )

    async with make_api(handler, HttpUserDirectory) as users:
        user = await users.get_user(2)

    assert user.display_name == "Петр Петров"
