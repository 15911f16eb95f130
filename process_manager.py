# process_manager.py
# -*- coding: utf-8 -*-
"""
Глобальный координатор зависимостей.
Инициализирует конфигурацию и HTTP-клиенты один раз и предоставляет к ним доступ.
"""

import logging
from typing import Optional

from config.bot_config import BotConfig
from config.logging_config import setup_logging
from core.utils.api_client import GeocodingClient, OpenMeteoClient

logger = logging.getLogger("process_manager")


class ProcessManager:
    """
    Единый контекст приложения. Все зависимости инициализируются здесь.
    """

    def __init__(self):
        self._initialized = False
        self.config: Optional[BotConfig] = None
        # Геокодер и источник прогноза для секвенсора
        self.resolver: Optional[GeocodingClient] = None
        self.fetcher: Optional[OpenMeteoClient] = None

    def initialize_sync(self, config: Optional[BotConfig] = None):
        """Синхронная инициализация всех компонентов."""
        if self._initialized:
            return

        # 1. Конфигурация и логирование
        self.config = config or BotConfig.load()
        setup_logging(self.config.log_level)

        # 2. HTTP-клиенты Open-Meteo
        self.resolver = GeocodingClient(
            base_url=self.config.geocoding_url,
            timeout=self.config.request_timeout
        )
        self.fetcher = OpenMeteoClient(
            base_url=self.config.forecast_url,
            timeout=self.config.request_timeout
        )

        self._initialized = True
        logger.info("✅ ProcessManager: initialized (open-meteo clients ready)")

    async def shutdown(self, application=None):
        """Закрывает HTTP-клиенты. Подходит как post_shutdown для Application."""
        if not self._initialized:
            return
        await self.resolver.aclose()
        await self.fetcher.aclose()
        self._initialized = False
        logger.info("🛑 ProcessManager: shut down")


# Глобальный экземпляр — точка доступа для всех модулей
process_manager = ProcessManager()
