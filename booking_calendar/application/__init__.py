"""
Прикладной слой: кэш бронирований и сервис страницы календаря.
"""

from .dto import BookingDetailsDTO, BookingRequestForm, CreateBookingRequest, FeedbackDTO
from .ports import IBookingApi, ILogger, IUserDirectory
from .services import CalendarPageService
from .store import BookingStore, PendingMutation

__all__ = [
    "BookingDetailsDTO",
    "BookingRequestForm",
    "CreateBookingRequest",
    "FeedbackDTO",
    "IBookingApi",
    "ILogger",
    "IUserDirectory",
    "CalendarPageService",
    "BookingStore",
    "PendingMutation",
]
