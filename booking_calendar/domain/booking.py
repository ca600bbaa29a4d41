"""
Доменная модель бронирования.

Содержит сущность бронирования, проекцию пользователя
и правила, которые проверяются до отправки запроса на сервер.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import ValidationError
from .value_objects import BookingId, BookingStatus, UserId, now


class User(BaseModel):
    """Минимальная проекция пользователя."""

    model_config = ConfigDict(frozen=True)

    id: UserId
    display_name: str


class Booking(BaseModel):
    """Запрос одного пользователя к другому на дату/время."""

    model_config = ConfigDict(frozen=True)

    id: BookingId
    requester_id: UserId
    recipient_id: UserId
    date: dt.date
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    fee: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    note: Optional[str] = None
    status: BookingStatus = BookingStatus.REQUESTED
    created_at: dt.datetime = Field(default_factory=now)

    @model_validator(mode="after")
    def requester_differs_from_recipient(self) -> "Booking":
        if self.requester_id == self.recipient_id:
            raise ValueError("Нельзя отправить запрос на бронирование самому себе")
        return self

    @property
    def is_all_day(self) -> bool:
        """Бронирование без времени начала занимает весь день."""
        return self.start_time is None

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.REQUESTED

    @property
    def is_provisional(self) -> bool:
        """Локальная запись, еще не подтвержденная сервером."""
        return self.id < 0

    def involves(self, user_id: UserId) -> bool:
        return user_id in (self.requester_id, self.recipient_id)

    def with_status(self, status: BookingStatus) -> "Booking":
        """Возвращает копию бронирования с новым статусом."""
        return self.model_copy(update={"status": status})

    @classmethod
    def provisional(
        cls,
        temp_id: BookingId,
        requester_id: UserId,
        recipient_id: UserId,
        date: dt.date,
        start_time: Optional[dt.time] = None,
        end_time: Optional[dt.time] = None,
        fee: Optional[float] = None,
        location: Optional[str] = None,
        note: Optional[str] = None,
    ) -> "Booking":
        """Создает временную запись для оптимистичного обновления кэша."""
        if temp_id >= 0:
            raise ValueError("Временный идентификатор должен быть отрицательным")
        return cls(
            id=temp_id,
            requester_id=requester_id,
            recipient_id=recipient_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            fee=fee,
            location=location,
            note=note,
            status=BookingStatus.REQUESTED,
        )


class BookingPolicy:
    """Правила, проверяемые локально перед созданием бронирования."""

    @classmethod
    def validate_request(
        cls,
        requester_id: UserId,
        recipient_id: UserId,
        requested_date: dt.date,
        start_time: Optional[dt.time],
        end_time: Optional[dt.time],
        today: dt.date,
    ) -> None:
        """Проверяет запрос; при нарушении выбрасывает ValidationError."""
        if requested_date < today:
            raise ValidationError("Нельзя запросить бронирование на прошедшую дату")

        if requester_id == recipient_id:
            raise ValidationError("Нельзя отправить запрос на бронирование самому себе")

        # Окончание раньше начала означает переход через полночь
        if start_time is not None and end_time is not None and end_time == start_time:
            raise ValidationError("Время окончания должно отличаться от времени начала")
