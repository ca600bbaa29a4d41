from typing import Optional

from .application import BookingStore, CalendarPageService, IBookingApi, IUserDirectory
from .config import ClientSettings
from .domain import CalendarProjector
from .infrastructure import ConsoleLogger, HttpBookingApi, HttpUserDirectory


def bootstrap_app(
    settings: Optional[ClientSettings] = None,
    api: Optional[IBookingApi] = None,
    users: Optional[IUserDirectory] = None,
):
    """Создает и настраивает все компоненты приложения."""
    settings = settings or ClientSettings.from_env()
    logger = ConsoleLogger(debug=settings.log_debug)

    # 1. Адаптеры к серверу, если не переданы готовые
    api = api or HttpBookingApi(settings.api_base_url, timeout=settings.request_timeout)
    users = users or HttpUserDirectory(
        settings.api_base_url, timeout=settings.request_timeout
    )

    # 2. Кэш и сервис страницы
    store = BookingStore(api, logger)
    page = CalendarPageService(
        store,
        users,
        projector=CalendarProjector(placeholder_title=settings.placeholder_title),
        week_start=settings.week_start,
    )

    return {
        "settings": settings,
        "logger": logger,
        "store": store,
        "calendar_page": page,
    }
