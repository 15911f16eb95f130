# -*- coding: utf-8 -*-
"""
Последовательность «геокодинг → прогноз» для виджета погоды.

Состояния: IDLE → RESOLVING → FETCHING → DONE_SUCCESS | DONE_ERROR

Запускается при каждой смене локации (и при первом показе виджета).
Перекрывающиеся запуски не отменяются: каждый работает независимо,
итоговое состояние определяет тот, кто завершился последним.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol

from core.models.weather_response import Coordinates, ForecastResult
from core.utils.error_handler import WeatherWidgetError, log_exception
from scripts.weather._services.view_state import WeatherViewState

logger = logging.getLogger("sequencer")


class SequencePhase(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    DONE_SUCCESS = "done_success"
    DONE_ERROR = "done_error"


class LocationResolver(Protocol):
    async def resolve(self, location: str) -> Coordinates: ...


class ForecastFetcher(Protocol):
    async def fetch(self, coordinates: Coordinates) -> ForecastResult: ...


Observer = Callable[[WeatherViewState, SequencePhase], Awaitable[None]]


async def _notify(observer: Optional[Observer], state: WeatherViewState, phase: SequencePhase):
    if observer is None:
        return
    try:
        await observer(state, phase)
    except Exception as e:
        log_exception(e, "Ошибка в наблюдателе последовательности", {"phase": phase.value})


async def run_sequence(
    state: WeatherViewState,
    resolver: LocationResolver,
    fetcher: ForecastFetcher,
    observer: Optional[Observer] = None
) -> SequencePhase:
    """
    Выполняет одну последовательность для state.location.

    Args:
        state: Состояние виджета (изменяется на месте)
        resolver: Геокодер
        fetcher: Источник прогноза
        observer: Асинхронный колбэк, вызывается после каждого перехода

    Returns:
        SequencePhase: DONE_SUCCESS или DONE_ERROR
    """
    location = state.location
    state.sequence_id += 1
    seq = state.sequence_id

    state.is_loading = True
    state.forecast = None
    state.error = None
    logger.info(f"🚀 Последовательность #{seq}: '{location}'")
    await _notify(observer, state, SequencePhase.RESOLVING)

    try:
        coordinates = await resolver.resolve(location)
        logger.debug(f"Последовательность #{seq}: координаты {coordinates}")
        await _notify(observer, state, SequencePhase.FETCHING)
        forecast = await fetcher.fetch(coordinates)
    except WeatherWidgetError as e:
        log_exception(e, f"Последовательность #{seq} завершилась ошибкой", {"location": location})
        state.error = e
        state.is_loading = False
        await _notify(observer, state, SequencePhase.DONE_ERROR)
        return SequencePhase.DONE_ERROR
    except Exception:
        # Непредвиденная ошибка пробрасывается, но загрузка не остаётся включённой
        state.is_loading = False
        raise

    state.forecast = forecast
    state.error = None
    state.is_loading = False
    logger.info(f"✅ Последовательность #{seq}: '{location}', {len(forecast)} строк")
    await _notify(observer, state, SequencePhase.DONE_SUCCESS)
    return SequencePhase.DONE_SUCCESS
