# -*- coding: utf-8 -*-
"""
Общие фикстуры: ответы Open-Meteo и лёгкие заглушки объектов Telegram.
"""
import asyncio
from types import SimpleNamespace

import pytest

from core.models.weather_response import Coordinates, ForecastResult
from core.utils.api_client import parse_hourly
from core.utils.error_handler import ResolutionError

AUSTIN = Coordinates(latitude=30.26715, longitude=-97.74306)

HOURLY_PAYLOAD = {
    "latitude": 30.26,
    "longitude": -97.74,
    "hourly_units": {"time": "iso8601", "temperature_2m": "°F"},
    "hourly": {
        "time": ["2026-10-19T00:00", "2026-10-19T01:00", "2026-10-19T02:00"],
        "temperature_2m": [72.3, 71.1, 70.0]
    }
}


@pytest.fixture
def hourly_payload():
    return {**HOURLY_PAYLOAD, "hourly": {k: list(v) for k, v in HOURLY_PAYLOAD["hourly"].items()}}


@pytest.fixture
def forecast() -> ForecastResult:
    return parse_hourly(HOURLY_PAYLOAD)


class FakeResolver:
    """Геокодер-заглушка: известные города → координаты, остальные → ошибка."""

    def __init__(self, known=None):
        self.known = known if known is not None else {"austin": AUSTIN, "dallas": Coordinates(32.78, -96.8)}
        self.calls = []

    async def resolve(self, location):
        self.calls.append(location)
        if location not in self.known:
            raise ResolutionError(location)
        return self.known[location]


class FakeFetcher:
    def __init__(self, result: ForecastResult):
        self.result = result
        self.calls = []

    async def fetch(self, coordinates):
        self.calls.append(coordinates)
        return self.result


class FakeBot:
    def __init__(self):
        self.sent = []
        self.edited = []
        self._next_id = 100

    async def send_message(self, chat_id, text, reply_markup=None, parse_mode=None):
        self._next_id += 1
        self.sent.append(SimpleNamespace(chat_id=chat_id, text=text, reply_markup=reply_markup, message_id=self._next_id))
        return SimpleNamespace(message_id=self._next_id)

    async def edit_message_text(self, chat_id, message_id, text, reply_markup=None, parse_mode=None):
        self.edited.append(SimpleNamespace(chat_id=chat_id, message_id=message_id, text=text, reply_markup=reply_markup))


class FakeApplication:
    def __init__(self):
        self.tasks = []

    def create_task(self, coroutine, update=None, *, name=None):
        task = asyncio.ensure_future(coroutine)
        self.tasks.append(task)
        return task

    async def drain(self):
        await asyncio.gather(*self.tasks)


class FakeQuery:
    def __init__(self, data, message_id=77):
        self.data = data
        self.message = SimpleNamespace(message_id=message_id)
        self.answered = False

    async def answer(self):
        self.answered = True


@pytest.fixture
def context():
    return SimpleNamespace(bot=FakeBot(), application=FakeApplication(), chat_data={})


def make_update(callback_data=None, text=None, chat_id=1, user_id=42):
    return SimpleNamespace(
        effective_chat=SimpleNamespace(id=chat_id),
        effective_user=SimpleNamespace(id=user_id),
        callback_query=FakeQuery(callback_data) if callback_data is not None else None,
        message=SimpleNamespace(text=text) if text is not None else None
    )
