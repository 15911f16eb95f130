# -*- coding: utf-8 -*-
"""
Асинхронные клиенты Open-Meteo (httpx).

- GeocodingClient.resolve(location) — название города → Coordinates
- OpenMeteoClient.fetch(coordinates) — Coordinates → почасовой прогноз (°F)

Каждый вызов — ровно один HTTP-запрос: без повторов, без кэша,
без ограничения частоты. Любая ошибка превращается в ResolutionError
или FetchError соответственно.
"""
import logging
import math
from typing import Optional

import httpx
import pandas as pd

from config.bot_config import DEFAULT_FORECAST_URL, DEFAULT_GEOCODING_URL, DEFAULT_REQUEST_TIMEOUT
from core.models.weather_response import Coordinates, ForecastResult, ForecastSample
from core.utils.error_handler import FetchError, ResolutionError

logger = logging.getLogger("api_client")


class _BaseClient:
    """Общий httpx.AsyncClient; внешний клиент не закрывается."""

    def __init__(self, base_url: str, timeout: float, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def _get_json(self, params: dict) -> dict:
        response = await self._client.get(self.base_url, params=params)
        response.raise_for_status()
        return response.json()

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()


class GeocodingClient(_BaseClient):
    """Клиент геокодера Open-Meteo."""

    def __init__(
        self,
        base_url: str = DEFAULT_GEOCODING_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None
    ):
        super().__init__(base_url, timeout, client)

    async def resolve(self, location: str) -> Coordinates:
        """
        Возвращает координаты первого (наиболее подходящего) совпадения.

        Args:
            location (str): Название места, передаётся как есть

        Returns:
            Coordinates

        Raises:
            ResolutionError: совпадений нет или запрос не удался
        """
        try:
            data = await self._get_json({"name": location, "count": 1})
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"❌ Геокодер: ошибка запроса для '{location}': {e}")
            raise ResolutionError(location, reason=str(e)) from e

        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            logger.warning(f"🌍 Геокодер: '{location}' не найден")
            raise ResolutionError(location)

        try:
            first = results[0]
            coordinates = Coordinates(
                latitude=float(first["latitude"]),
                longitude=float(first["longitude"])
            )
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            logger.error(f"❌ Геокодер: неверный формат ответа для '{location}': {e}")
            raise ResolutionError(location, reason="malformed response") from e

        logger.info(f"🌍 '{location}' → ({coordinates.latitude}, {coordinates.longitude})")
        return coordinates


class OpenMeteoClient(_BaseClient):
    """Клиент почасового прогноза Open-Meteo."""

    def __init__(
        self,
        base_url: str = DEFAULT_FORECAST_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None
    ):
        super().__init__(base_url, timeout, client)

    async def fetch(self, coordinates: Coordinates) -> ForecastResult:
        """
        Получает почасовую температуру (°F) для точки.

        Raises:
            FetchError: сетевая ошибка, не-2xx статус или неверный ответ
        """
        lat, lon = coordinates.latitude, coordinates.longitude
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": "temperature_2m",
            "temperature_unit": "fahrenheit"
        }

        try:
            data = await self._get_json(params)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"❌ Open-Meteo: ошибка запроса для ({lat}, {lon}): {e}")
            raise FetchError(lat, lon, reason=str(e)) from e

        try:
            forecast = parse_hourly(data)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            logger.error(f"❌ Open-Meteo: неверный формат ответа для ({lat}, {lon}): {e}")
            raise FetchError(lat, lon, reason="malformed response") from e

        logger.info(f"✅ Open-Meteo: прогноз получен для ({lat}, {lon}), {len(forecast)} ч.")
        return forecast


def parse_hourly(data: dict) -> ForecastResult:
    """
    Разбирает блок 'hourly' ответа Open-Meteo.

    Массивы 'time' и 'temperature_2m' должны быть одной длины;
    пропуски (null) в температуре становятся NaN.
    """
    hourly = data["hourly"]
    raw_times = hourly["time"]
    raw_temps = hourly["temperature_2m"]
    if len(raw_times) != len(raw_temps):
        raise ValueError(
            f"длины массивов не совпадают: time={len(raw_times)}, temperature_2m={len(raw_temps)}"
        )

    times = pd.to_datetime(raw_times).to_pydatetime() if raw_times else []
    samples = [
        ForecastSample(timestamp=ts, temperature_f=math.nan if temp is None else float(temp))
        for ts, temp in zip(times, raw_temps)
    ]
    return ForecastResult(samples=samples)
