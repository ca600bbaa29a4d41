"""
Календарь бронирований.

Пользователь (инициатор) просит другого пользователя (получателя)
зарезервировать дату и время; получатель принимает или отклоняет запрос,
инициатор может его отменить. Календарь показывает бронирования,
доступные конкретному зрителю.
"""

from . import application, domain, infrastructure

__all__ = [
    "domain",
    "application",
    "infrastructure",
]
