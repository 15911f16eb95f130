# -*- coding: utf-8 -*-
"""
Тесты для scripts/weather/_processes/formatter.py
"""
from datetime import datetime, timedelta

from core.models.weather_response import ForecastResult, ForecastSample
from core.utils.error_handler import ResolutionError
from scripts.weather._processes.formatter import (
    ROWS_PER_PAGE,
    format_hour,
    format_temperature,
    render_table_pages,
    render_widget
)
from scripts.weather._services.view_state import WeatherViewState


def make_forecast(hours: int) -> ForecastResult:
    start = datetime(2026, 10, 19, 0, 0)
    return ForecastResult(samples=[
        ForecastSample(timestamp=start + timedelta(hours=i), temperature_f=60.0 + i * 0.5)
        for i in range(hours)
    ])


def count_rows(pages):
    return sum(page.count("\n") - 2 for page in pages)


def test_format_hour():
    assert format_hour(datetime(2026, 1, 5, 0, 0)) == "1/5/2026 0:00"
    assert format_hour(datetime(2026, 10, 19, 14, 0)) == "10/19/2026 14:00"


def test_format_temperature():
    assert format_temperature(72.34) == "72.3"
    assert format_temperature(float("nan")) == "—"


def test_table_rows_follow_forecast_order(forecast):
    pages = render_table_pages("austin", forecast)
    assert len(pages) == 1
    page = pages[0]
    assert page.index("10/19/2026 0:00") < page.index("10/19/2026 1:00") < page.index("10/19/2026 2:00")
    assert "72.3" in page
    assert "Forecast (F)" in page
    assert count_rows(pages) == 3


def test_full_week_is_split_into_pages():
    forecast = make_forecast(168)
    pages = render_table_pages("austin", forecast)
    assert len(pages) == 168 // ROWS_PER_PAGE + (1 if 168 % ROWS_PER_PAGE else 0)
    assert count_rows(pages) == 168
    assert all(len(page) < 4096 for page in pages)


def test_render_success(forecast):
    state = WeatherViewState(forecast=forecast)
    rendered = render_widget(state)
    assert "austin" in rendered.text
    assert "3 ч." in rendered.text
    assert count_rows(rendered.table_pages) == len(forecast.times)


def test_error_has_priority_over_table(forecast):
    state = WeatherViewState(location="zzzzqqqq", forecast=forecast, error=ResolutionError("zzzzqqqq"))
    rendered = render_widget(state)
    assert "o no!" in rendered.text
    assert "zzzzqqqq" in rendered.text
    assert rendered.table_pages == []


def test_loading_hides_table(forecast):
    state = WeatherViewState(forecast=forecast, is_loading=True)
    rendered = render_widget(state)
    assert "Загрузка" in rendered.text
    assert rendered.table_pages == []


def test_custom_location_is_escaped():
    state = WeatherViewState(custom_location="<b>evil</b>")
    rendered = render_widget(state)
    assert "&lt;b&gt;evil&lt;/b&gt;" in rendered.text


def test_no_weather_placeholder():
    rendered = render_widget(WeatherViewState())
    assert "no weather" in rendered.text
    assert rendered.table_pages == []


def test_long_location_stays_within_message_limit(forecast):
    long_name = "x" * 3000
    state = WeatherViewState(location=long_name, custom_location=long_name, error=ResolutionError(long_name))
    rendered = render_widget(state)
    assert len(rendered.text) < 4096
    assert "..." in rendered.text

    pages = render_table_pages(long_name, forecast)
    assert all(len(page) < 4096 for page in pages)
