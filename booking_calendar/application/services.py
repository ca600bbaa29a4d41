"""
Прикладной сервис страницы календаря.

Координирует поток: кэш -> фильтр -> проекция, а действия
пользователя передает в кэш бронирований.
"""

from datetime import date, datetime
from typing import Callable, List, Optional, Union

from ..domain import (
    ApplicableToggles,
    AuthorizationPolicy,
    Booking,
    BookingAction,
    BookingFilterView,
    BookingId,
    CalendarDay,
    CalendarEvent,
    CalendarProjector,
    CalendarView,
    DomainException,
    FilterToggles,
    NavigateAction,
    UserId,
    ViewWindow,
    applicable_toggles,
    default_toggles,
    today,
)
from .dto import BookingDetailsDTO, BookingRequestForm, FeedbackDTO
from .ports import IUserDirectory
from .store import BookingStore


class CalendarPageService:
    """Сервис приложения для календаря бронирований одного профиля."""

    def __init__(
        self,
        store: BookingStore,
        users: IUserDirectory,
        projector: Optional[CalendarProjector] = None,
        week_start: int = 6,
        clock: Callable[[], date] = today,
    ):
        """Инициализирует сервис."""
        self._store = store
        self._users = users
        self._projector = projector or CalendarProjector()
        self._clock = clock
        self._viewer_id: Optional[UserId] = None
        self._calendar_owner_id: Optional[UserId] = None
        self.toggles = FilterToggles()
        self.window = ViewWindow(
            view=CalendarView.MONTH, focus_date=clock(), week_start=week_start
        )

    @property
    def store(self) -> BookingStore:
        return self._store

    @property
    def projector(self) -> CalendarProjector:
        return self._projector

    @property
    def is_own_calendar(self) -> bool:
        return self._viewer_id is not None and self._viewer_id == self._calendar_owner_id

    def _require_identity(self) -> UserId:
        if self._viewer_id is None or self._calendar_owner_id is None:
            raise RuntimeError("Календарь не открыт: вызовите open_calendar()")
        return self._viewer_id

    # Идентичность и переключатели

    def open_calendar(self, viewer_id: UserId, calendar_owner_id: UserId) -> FilterToggles:
        """Открывает календарь профиля; при смене пары сбрасывает переключатели."""
        if (viewer_id, calendar_owner_id) != (self._viewer_id, self._calendar_owner_id):
            self._viewer_id = viewer_id
            self._calendar_owner_id = calendar_owner_id
            self.toggles = default_toggles(viewer_id == calendar_owner_id)
        return self.toggles

    def applicable_toggles(self) -> ApplicableToggles:
        return applicable_toggles(self.is_own_calendar)

    def toggle_sent(self) -> FilterToggles:
        if self.is_own_calendar:
            self.toggles = self.toggles.model_copy(
                update={"include_sent": not self.toggles.include_sent}
            )
        return self.toggles

    def toggle_received(self) -> FilterToggles:
        self.toggles = self.toggles.model_copy(
            update={"include_received": not self.toggles.include_received}
        )
        return self.toggles

    # Навигация

    def change_view(self, view: CalendarView) -> ViewWindow:
        self.window = self.window.with_view(view)
        return self.window

    def navigate(self, action: NavigateAction, target: Optional[date] = None) -> ViewWindow:
        self.window = self.window.navigate(action, target=target, today=self._clock())
        return self.window

    def calendar_days(self) -> List[CalendarDay]:
        return self.window.days(today=self._clock())

    # Чтение

    async def load(self) -> List[Booking]:
        """Загружает бронирования текущего пользователя."""
        viewer_id = self._require_identity()
        return await self._store.list_bookings(viewer_id)

    def visible_bookings(self) -> List[Booking]:
        viewer_id = self._require_identity()
        return BookingFilterView.visible(
            self._store.bookings, viewer_id, self._calendar_owner_id, self.toggles
        )

    def visible_events(self) -> List[CalendarEvent]:
        """События видимых бронирований в текущем окне."""
        return self._projector.project(self.visible_bookings(), self.window)

    def select_slot(self, slot_start: Union[date, datetime]) -> date:
        return self._projector.select_slot(slot_start)

    def select_event(self, event: CalendarEvent) -> Booking:
        return self._projector.select_event(event, self._store.bookings)

    def allowed_actions(self, booking: Booking) -> List[BookingAction]:
        viewer_id = self._require_identity()
        return AuthorizationPolicy.allowed_actions(viewer_id, booking)

    def is_busy(self, booking_id: BookingId) -> bool:
        """Нужно ли заблокировать элементы управления бронированием."""
        return self._store.is_pending(booking_id)

    async def details(self, booking: Booking) -> BookingDetailsDTO:
        """Возвращает данные для окна деталей бронирования."""
        requester = await self._users.get_user(booking.requester_id)
        recipient = await self._users.get_user(booking.recipient_id)
        return BookingDetailsDTO.from_domain(
            booking,
            requester_name=requester.display_name,
            recipient_name=recipient.display_name,
        )

    # Действия

    async def request_booking(self, form: BookingRequestForm) -> Booking:
        """Отправляет запрос владельцу открытого календаря."""
        viewer_id = self._require_identity()
        request = form.to_request(recipient_id=self._calendar_owner_id)
        return await self._store.create_booking(request, requester_id=viewer_id)

    async def act(self, booking_id: BookingId, action: Union[BookingAction, str]) -> Booking:
        viewer_id = self._require_identity()
        return await self._store.apply_transition(booking_id, viewer_id, action)

    @staticmethod
    def feedback_for(error: DomainException) -> FeedbackDTO:
        return FeedbackDTO.from_error(error)
