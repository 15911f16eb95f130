# scripts/weather/weather_handler.py
import asyncio
import logging

from telegram import Update
from telegram.constants import ParseMode
from telegram.error import BadRequest
from telegram.ext import ContextTypes

from core.ui.navigation import CITY_CALLBACK_PREFIX, get_weather_keyboard
from process_manager import process_manager
from scripts.weather._processes.formatter import RenderedWidget, render_widget
from scripts.weather._processes.sequencer import SequencePhase, run_sequence
from scripts.weather._services.view_state import WeatherViewState

STATE_KEY = "weather_widget"


def get_view_state(context: ContextTypes.DEFAULT_TYPE) -> WeatherViewState:
    """Состояние виджета текущего чата (создаётся при первом обращении)."""
    state = context.chat_data.get(STATE_KEY)
    if state is None:
        state = WeatherViewState()
        context.chat_data[STATE_KEY] = state
    return state


async def refresh_widget_message(context: ContextTypes.DEFAULT_TYPE, chat_id: int, state: WeatherViewState) -> RenderedWidget:
    """Отправляет сообщение виджета или редактирует уже отправленное."""
    rendered = render_widget(state)
    keyboard = get_weather_keyboard(state.cities, state.location, state.custom_location)

    if state.message_id is None:
        message = await context.bot.send_message(
            chat_id=chat_id,
            text=rendered.text,
            reply_markup=keyboard,
            parse_mode=ParseMode.HTML
        )
        state.message_id = message.message_id
        return rendered

    try:
        await context.bot.edit_message_text(
            chat_id=chat_id,
            message_id=state.message_id,
            text=rendered.text,
            reply_markup=keyboard,
            parse_mode=ParseMode.HTML
        )
    except BadRequest as e:
        # Telegram отвечает ошибкой, если текст и клавиатура не изменились
        if "not modified" not in str(e).lower():
            raise
    return rendered


def make_observer(context: ContextTypes.DEFAULT_TYPE, chat_id: int):
    """Наблюдатель секвенсора: перерисовывает виджет, по успеху шлёт таблицу."""
    async def observer(state: WeatherViewState, phase: SequencePhase):
        rendered = await refresh_widget_message(context, chat_id, state)
        if phase == SequencePhase.DONE_SUCCESS:
            for page in rendered.table_pages:
                await context.bot.send_message(chat_id=chat_id, text=page, parse_mode=ParseMode.HTML)
    return observer


def start_sequence(context: ContextTypes.DEFAULT_TYPE, chat_id: int, state: WeatherViewState) -> asyncio.Task:
    """
    Запускает «геокодинг → прогноз» в фоне.

    Предыдущие незавершённые последовательности не отменяются.
    """
    logging.info(f"🔁 Чат {chat_id}: запуск прогноза для '{state.location}'")
    return context.application.create_task(
        run_sequence(
            state,
            process_manager.resolver,
            process_manager.fetcher,
            observer=make_observer(context, chat_id)
        )
    )


# === КОМАНДА /weather ===
async def weather_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Показывает виджет и запускает прогноз для текущей локации."""
    chat_id = update.effective_chat.id
    logging.info(f"👤 Пользователь {update.effective_user.id}: вызвано /weather")
    state = get_view_state(context)
    # Новый экземпляр сообщения виджета внизу чата
    state.message_id = None
    start_sequence(context, chat_id, state)


# === КНОПКИ ГОРОДОВ ===
async def weather_city_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()
    chat_id = update.effective_chat.id
    state = get_view_state(context)
    if state.message_id is None:
        state.message_id = query.message.message_id

    try:
        index = int(query.data[len(CITY_CALLBACK_PREFIX):])
    except ValueError:
        index = -1
    if not 0 <= index < len(state.cities):
        logging.warning(f"⚠️ Чат {chat_id}: неизвестная кнопка города '{query.data}'")
        return

    city = state.cities[index]
    logging.info(f"🖱️ Чат {chat_id}: выбран город '{city}'")
    if state.select_location(city):
        start_sequence(context, chat_id, state)


async def weather_refresh_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Повторный запрос прогноза для той же локации."""
    query = update.callback_query
    await query.answer()
    chat_id = update.effective_chat.id
    state = get_view_state(context)
    if state.message_id is None:
        state.message_id = query.message.message_id
    state.refresh_count += 1
    start_sequence(context, chat_id, state)
