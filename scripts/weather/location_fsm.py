# scripts/weather/location_fsm.py
import logging

from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler

from scripts.weather.weather_handler import get_view_state, refresh_widget_message, start_sequence

# Состояние ТОЛЬКО для ввода другого города
CUSTOM_LOCATION_INPUT = 1
# Ограничение длины ввода
MAX_CUSTOM_LOCATION_LEN = 100


async def ask_custom_location(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Кнопка «Другой город»: просим ввести название."""
    query = update.callback_query
    await query.answer()
    state = get_view_state(context)
    if state.message_id is None:
        state.message_id = query.message.message_id
    logging.info(f"🖱️ Пользователь {update.effective_user.id}: ввод другого города")
    await context.bot.send_message(
        chat_id=update.effective_chat.id,
        text="Введите название города (или /cancel):"
    )
    return CUSTOM_LOCATION_INPUT


async def handle_custom_text(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Текст сохраняется как черновик; фиксируется кнопкой «Установить»."""
    user_input = update.message.text.strip()[:MAX_CUSTOM_LOCATION_LEN]
    chat_id = update.effective_chat.id
    logging.info(f"⌨️ Чат {chat_id}: введён текст '{user_input}'")
    state = get_view_state(context)
    state.set_custom_location(user_input)
    await refresh_widget_message(context, chat_id, state)
    return CUSTOM_LOCATION_INPUT


async def submit_custom_location(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Кнопка «Установить»: добавляет город, выбирает его и очищает ввод."""
    query = update.callback_query
    await query.answer()
    chat_id = update.effective_chat.id
    state = get_view_state(context)
    if state.message_id is None:
        state.message_id = query.message.message_id

    changed = state.submit_custom_location()
    await refresh_widget_message(context, chat_id, state)
    if changed:
        start_sequence(context, chat_id, state)
    return ConversationHandler.END


async def cancel_custom(update: Update, context: ContextTypes.DEFAULT_TYPE):
    chat_id = update.effective_chat.id
    state = get_view_state(context)
    state.set_custom_location("")
    await context.bot.send_message(chat_id=chat_id, text="Отменено.")
    if state.message_id is not None:
        await refresh_widget_message(context, chat_id, state)
    return ConversationHandler.END
