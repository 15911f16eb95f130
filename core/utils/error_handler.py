# -*- coding: utf-8 -*-
"""
Ошибки виджета погоды и централизованное логирование исключений.

Иерархия:
- WeatherWidgetError — базовая ошибка виджета
  - ResolutionError — город не найден или геокодер недоступен
  - FetchError — прогноз не получен (сеть, статус, разбор ответа)
"""

import logging
from typing import Optional

logger = logging.getLogger("error_handler")


class WeatherWidgetError(Exception):
    """Базовая ошибка виджета. Текст показывается пользователю."""


class ResolutionError(WeatherWidgetError):
    """Не удалось получить координаты для локации."""

    def __init__(self, location: str, reason: str = "not found"):
        self.location = location
        self.reason = reason
        super().__init__(f"Could not geo-locate city: {location} ({reason})")


class FetchError(WeatherWidgetError):
    """Не удалось получить почасовой прогноз."""

    def __init__(self, latitude: float, longitude: float, reason: str):
        self.latitude = latitude
        self.longitude = longitude
        self.reason = reason
        super().__init__(f"Could not fetch forecast for ({latitude}, {longitude}): {reason}")


def log_exception(exception: Exception, message: str = "Необработанное исключение", context: Optional[dict] = None):
    """
    Логирует исключение без выбрасывания.

    Args:
        exception (Exception): Исключение
        message (str): Описание
        context (dict): Контекст (chat_id, location и т.п.)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=True)
