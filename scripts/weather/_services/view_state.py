# -*- coding: utf-8 -*-
"""
Состояние виджета погоды для одного чата.

Один экземпляр WeatherViewState хранится в context.chat_data и
передаётся по ссылке во все обработчики и в секвенсор.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from config.bot_config import DEFAULT_CITIES
from core.models.weather_response import ForecastResult
from core.utils.error_handler import WeatherWidgetError

logger = logging.getLogger("view_state")

DEFAULT_LOCATION = DEFAULT_CITIES[0]


@dataclass
class WeatherViewState:
    location: str = DEFAULT_LOCATION
    cities: List[str] = field(default_factory=lambda: list(DEFAULT_CITIES))
    custom_location: str = ""
    forecast: Optional[ForecastResult] = None
    error: Optional[WeatherWidgetError] = None
    is_loading: bool = False
    # Счётчик запущенных последовательностей (только для логов)
    sequence_id: int = 0
    refresh_count: int = 0
    # Сообщение виджета в чате, которое редактируется при каждом изменении
    message_id: Optional[int] = None

    def select_location(self, city: str) -> bool:
        """Выбирает локацию. Возвращает True, если выбор изменился."""
        if city == self.location:
            return False
        logger.info(f"📍 Выбрана локация: '{self.location}' → '{city}'")
        self.location = city
        return True

    def set_custom_location(self, text: str):
        self.custom_location = text

    def add_city(self, city: str) -> bool:
        """Добавляет город в список быстрого выбора, если его там нет."""
        if city in self.cities:
            return False
        self.cities.append(city)
        return True

    def submit_custom_location(self) -> bool:
        """
        Фиксирует введённую локацию: добавляет в список городов (без дублей),
        делает текущей и очищает поле ввода.

        Пустой ввод игнорируется.

        Returns:
            bool: True, если текущая локация изменилась
        """
        city = self.custom_location.strip()
        if not city:
            logger.info("⌨️ Пустой ввод — пропускаем")
            return False
        if self.add_city(city):
            logger.info(f"➕ Город добавлен: '{city}'")
        self.custom_location = ""
        return self.select_location(city)
