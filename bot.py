# bot.py
# -*- coding: utf-8 -*-
"""
Основной скрипт бота: виджет почасового прогноза температуры.
"""
import logging
from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    CallbackQueryHandler,
    ConversationHandler,
    filters,
    ContextTypes
)
from telegram.constants import ParseMode
from process_manager import process_manager

from core.ui.navigation import (
    CITY_CALLBACK_PREFIX,
    CUSTOM_CALLBACK,
    CUSTOM_SUBMIT_CALLBACK,
    REFRESH_CALLBACK,
    MAIN_MENU_CALLBACK
)
from scripts.weather.location_fsm import (
    ask_custom_location,
    handle_custom_text,
    submit_custom_location,
    cancel_custom,
    CUSTOM_LOCATION_INPUT
)
from scripts.weather.weather_handler import (
    weather_command,
    weather_city_callback,
    weather_refresh_callback
)


# === Обработчики команд ===
async def global_navigation_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка глобальных навигационных кнопок."""
    query = update.callback_query
    await query.answer()

    if query.data == MAIN_MENU_CALLBACK:
        await start(update, context)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Главное меню."""
    await context.bot.send_message(
        chat_id=update.effective_chat.id,
        text=(
            "🌤️ <b>Погода</b>\n\n"
            "Выберите действие:\n"
            "• /weather — почасовой прогноз температуры (°F)"
        ),
        parse_mode=ParseMode.HTML
    )


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    logging.error(f"⚠️ Исключение при обработке: {context.error}", exc_info=context.error)
    if update and hasattr(update, 'update_id'):
        logging.error(f"Update ID: {update.update_id}")


def build_application(token: str) -> Application:
    """Создаёт приложение и регистрирует обработчики."""
    app = (
        Application.builder()
        .token(token)
        .post_shutdown(process_manager.shutdown)
        .build()
    )

    # FSM только для ввода другого города (запускается inline-кнопкой)
    custom_conv = ConversationHandler(
        entry_points=[
            CallbackQueryHandler(ask_custom_location, pattern=f"^{CUSTOM_CALLBACK}$")
        ],
        states={
            CUSTOM_LOCATION_INPUT: [
                MessageHandler(filters.TEXT & ~filters.COMMAND, handle_custom_text),
                CallbackQueryHandler(submit_custom_location, pattern=f"^{CUSTOM_SUBMIT_CALLBACK}$")
            ]
        },
        fallbacks=[
            CommandHandler("cancel", cancel_custom)
        ],
        per_user=True,
        allow_reentry=True
    )

    # === РЕГИСТРАЦИЯ ОБРАБОТЧИКОВ (ПОРЯДОК ВАЖЕН!) ===

    # 1. Команды
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("weather", weather_command))

    # 2. FSM — до универсальных обработчиков
    app.add_handler(custom_conv)

    # 3. Callback'и с pattern
    app.add_handler(CallbackQueryHandler(weather_city_callback, pattern=f"^{CITY_CALLBACK_PREFIX}"))
    app.add_handler(CallbackQueryHandler(weather_refresh_callback, pattern=f"^{REFRESH_CALLBACK}$"))
    # «Установить» вне диалога (например, после перезапуска бота)
    app.add_handler(CallbackQueryHandler(submit_custom_location, pattern=f"^{CUSTOM_SUBMIT_CALLBACK}$"))
    app.add_handler(CallbackQueryHandler(global_navigation_handler, pattern=f"^{MAIN_MENU_CALLBACK}$"))

    # 4. Обработчик ошибок
    app.add_error_handler(error_handler)
    return app


# === Основная функция запуска ===
def main():
    process_manager.initialize_sync()
    logging.info("🚀 Запуск бота")
    if not process_manager.config.telegram_token:
        logging.critical("❌ TELEGRAM_BOT_TOKEN не задан")
        raise ValueError("TELEGRAM_BOT_TOKEN не задан в .env!")

    app = build_application(process_manager.config.telegram_token)
    print("🚀 Бот запущен. Используйте /weather.")
    print("Нажмите Ctrl+C для остановки.")
    app.run_polling(drop_pending_updates=True)
    print("✅ Бот завершил работу.")


if __name__ == "__main__":
    main()
