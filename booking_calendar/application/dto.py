"""
Объекты передачи данных прикладного слоя.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..domain import Booking, BookingId, BookingStatus, DomainException, UserId

UNKNOWN_LOCATION = "Неизвестное место"
ALL_DAY_LABEL = "Весь день"
NOT_SPECIFIED_LABEL = "Не указано"
DETAILS_TITLE = "Детали бронирования"

# DTO для входящих данных


class CreateBookingRequest(BaseModel):
    """Запрос на создание бронирования (тело POST /bookings)."""

    model_config = ConfigDict(frozen=True)

    recipient_id: UserId
    date: dt.date
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    fee: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    note: Optional[str] = None

    @field_serializer("start_time", "end_time")
    def serialize_time(self, value: Optional[dt.time]) -> Optional[str]:
        return value.strftime("%H:%M") if value is not None else None


class BookingRequestForm(BaseModel):
    """Форма запроса на конкретную дату, выбранную в календаре."""

    date: dt.date
    start_time: Optional[dt.time] = dt.time(18, 0)
    end_time: Optional[dt.time] = dt.time(21, 0)
    fee: Optional[float] = Field(None, ge=0)
    location: str = ""
    note: str = ""

    def to_request(self, recipient_id: UserId) -> CreateBookingRequest:
        """Нормализует значения формы."""
        return CreateBookingRequest(
            recipient_id=recipient_id,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            fee=self.fee,
            location=self.location.strip() or UNKNOWN_LOCATION,
            note=self.note or None,
        )


# DTO для исходящих данных


class BookingDetailsDTO(BaseModel):
    """Представление бронирования в окне деталей."""

    id: BookingId
    title: str
    date: dt.date
    requester_name: str
    recipient_name: str
    time_label: str
    fee_label: str
    status: BookingStatus
    note: Optional[str] = None

    @classmethod
    def from_domain(
        cls, booking: Booking, requester_name: str, recipient_name: str
    ) -> "BookingDetailsDTO":
        """Создает DTO из доменной модели."""
        if booking.start_time is None:
            time_label = ALL_DAY_LABEL
        else:
            time_label = booking.start_time.strftime("%H:%M")
            if booking.end_time is not None:
                time_label += f" – {booking.end_time.strftime('%H:%M')}"

        return cls(
            id=booking.id,
            title=booking.location or DETAILS_TITLE,
            date=booking.date,
            requester_name=requester_name,
            recipient_name=recipient_name,
            time_label=time_label,
            fee_label=NOT_SPECIFIED_LABEL if booking.fee is None else f"{booking.fee:g}",
            status=booking.status,
            note=booking.note,
        )


class FeedbackDTO(BaseModel):
    """Сообщение об ошибке для интерфейса."""

    message: str
    surface: str
    retryable: bool

    @classmethod
    def from_error(cls, error: DomainException) -> "FeedbackDTO":
        return cls(message=str(error), surface=error.surface, retryable=error.retryable)
