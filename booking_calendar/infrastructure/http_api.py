"""
HTTP-адаптеры к серверу бронирований.

Аутентификация выполняется cookie сессии, поэтому сервер сам
ограничивает данные текущим пользователем.
"""

from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..application.dto import CreateBookingRequest
from ..domain import (
    AuthorizationError,
    Booking,
    BookingId,
    BookingStatus,
    DomainException,
    NetworkError,
    NotFoundError,
    StateError,
    User,
    UserId,
    ValidationError,
)

DEFAULT_TIMEOUT = 3.0

_ERRORS_BY_STATUS = {
    400: ValidationError,
    401: AuthorizationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: StateError,
    422: ValidationError,
}


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return response.text


def _error_for_response(response: httpx.Response) -> DomainException:
    error_class = _ERRORS_BY_STATUS.get(response.status_code, NetworkError)
    return error_class(f"{response.status_code}: {_detail(response)}")


class HttpClient:
    """Общая часть адаптеров: запрос и перевод ошибок в доменные."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        cookies: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._client = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout, cookies=cookies
        )

    async def request(
        self,
        method: str,
        path: str,
        payload: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        try:
            resp = await self._client.request(method, path, json=payload, params=params)
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise NetworkError(f"Превышено время ожидания: {method} {path}") from e
        except httpx.HTTPStatusError as e:
            raise _error_for_response(e.response) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Ошибка соединения: {method} {path}") from e

        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise NetworkError(f"Некорректный ответ сервера: {method} {path}") from e

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False


def _parse_booking(data: Any) -> Booking:
    try:
        return Booking.model_validate(data)
    except PydanticValidationError as e:
        raise NetworkError(f"Некорректные данные бронирования от сервера: {e}") from e


class HttpBookingApi(HttpClient):
    """Реализация IBookingApi поверх REST API."""

    async def list_bookings(self) -> List[Booking]:
        data = await self.request("GET", "/bookings")
        if not isinstance(data, list):
            raise NetworkError("Сервер вернул не список бронирований")
        return [_parse_booking(item) for item in data]

    async def create_booking(self, request: CreateBookingRequest) -> Booking:
        data = await self.request("POST", "/bookings", payload=request.model_dump(mode="json"))
        return _parse_booking(data)

    async def update_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        data = await self.request(
            "PATCH",
            f"/bookings/{booking_id}/status",
            payload={"status": BookingStatus(status).value},
        )
        return _parse_booking(data)


class HttpUserDirectory(HttpClient):
    """Реализация IUserDirectory поверх REST API."""

    async def get_user(self, user_id: UserId) -> User:
        data = await self.request("GET", f"/users/{user_id}")
        try:
            return User.model_validate(data)
        except PydanticValidationError as e:
            raise NetworkError(f"Некорректные данные пользователя от сервера: {e}") from e
