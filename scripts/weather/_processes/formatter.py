# -*- coding: utf-8 -*-
"""
Отрисовка виджета погоды (HTML для Telegram).

Чистая функция состояния: на вход WeatherViewState, на выход текст
сообщения виджета и страницы таблицы прогноза. Приоритет отображения:
ошибка → индикатор загрузки → таблица.
"""

import logging
import math
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from jinja2 import Template

from core.models.weather_response import ForecastResult
from scripts.weather._services.view_state import WeatherViewState

logger = logging.getLogger("formatter")

# Строк таблицы на одно сообщение (лимит Telegram — 4096 символов)
ROWS_PER_PAGE = 48

# Лимиты длины для подписей в сообщении
MAX_LOCATION_LEN = 50
MAX_DRAFT_LEN = 30
MAX_ERROR_LEN = 300

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "_io", "templates")


def _load_template(name: str) -> Template:
    with open(os.path.join(TEMPLATES_DIR, name), "r", encoding="utf-8") as f:
        return Template(f.read(), autoescape=True, trim_blocks=True, lstrip_blocks=True)


WIDGET_TEMPLATE = _load_template("weather_widget.html.j2")
TABLE_TEMPLATE = _load_template("weather_table.html.j2")


@dataclass
class RenderedWidget:
    text: str
    table_pages: List[str] = field(default_factory=list)


def shorten(text: str, limit: int) -> str:
    """Обрезает длинный текст с многоточием."""
    return text[:limit] + "..." if len(text) > limit else text


def format_hour(ts: datetime) -> str:
    """10/19/2026 14:00 — месяц/день/год час:00, без ведущих нулей."""
    return f"{ts.month}/{ts.day}/{ts.year} {ts.hour}:00"


def format_temperature(value: float) -> str:
    if math.isnan(value):
        return "—"
    return f"{value:.1f}"


def build_rows(forecast: ForecastResult) -> List[dict]:
    """Строки таблицы в порядке прогноза (без сортировки и фильтрации)."""
    return [
        {"time": format_hour(s.timestamp), "temperature": format_temperature(s.temperature_f)}
        for s in forecast.samples
    ]


def render_table_pages(location: str, forecast: ForecastResult, rows_per_page: int = ROWS_PER_PAGE) -> List[str]:
    rows = build_rows(forecast)
    chunks = [rows[i:i + rows_per_page] for i in range(0, len(rows), rows_per_page)]
    logger.debug(f"📋 Таблица '{shorten(location, MAX_LOCATION_LEN)}': {len(rows)} строк, {len(chunks)} стр.")
    return [
        TABLE_TEMPLATE.render(location=shorten(location, MAX_LOCATION_LEN), rows=chunk, page=i, page_count=len(chunks))
        for i, chunk in enumerate(chunks, 1)
    ]


def render_widget(state: WeatherViewState) -> RenderedWidget:
    """Отрисовывает виджет по текущему состоянию."""
    show_table = state.error is None and not state.is_loading and state.forecast is not None
    pages = render_table_pages(state.location, state.forecast) if show_table else []

    text = WIDGET_TEMPLATE.render(
        location=shorten(state.location, MAX_LOCATION_LEN),
        custom_location=shorten(state.custom_location, MAX_DRAFT_LEN),
        error=shorten(str(state.error), MAX_ERROR_LEN) if state.error else None,
        is_loading=state.is_loading,
        row_count=len(state.forecast) if show_table else None,
        page_count=len(pages)
    )
    return RenderedWidget(text=text.strip(), table_pages=pages)
