"""
Иерархия исключений контекста бронирования.

Каждый класс несет подсказку для интерфейса: где показывать
сообщение (`surface`) и имеет ли смысл повторять действие (`retryable`).
"""

INLINE = "inline"
BANNER = "banner"


class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    surface = BANNER
    retryable = False


class ValidationError(DomainException):
    """Некорректные данные запроса. Отклоняется до обращения к серверу."""

    surface = INLINE


class AuthorizationError(DomainException):
    """Роль участника не позволяет выполнить действие."""

    pass


class StateError(DomainException):
    """Бронирование уже не находится в статусе `requested`."""

    pass


class NetworkError(DomainException):
    """Сбой транспорта или сервера при создании/изменении бронирования."""

    retryable = True


class NotFoundError(DomainException):
    """Бронирование больше не существует."""

    def __init__(self, message: str, booking_id=None):
        super().__init__(message)
        self.booking_id = booking_id


class MutationInProgressError(DomainException):
    """Для этого бронирования уже выполняется изменение."""

    surface = INLINE
    retryable = True
