# core/ui/navigation.py
from typing import List

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

CITY_CALLBACK_PREFIX = "weather_city:"
CUSTOM_CALLBACK = "weather_custom"
CUSTOM_SUBMIT_CALLBACK = "weather_custom_submit"
REFRESH_CALLBACK = "weather_refresh"
MAIN_MENU_CALLBACK = "nav_main"


def get_weather_keyboard(cities: List[str], selected: str, custom_location: str = "") -> InlineKeyboardMarkup:
    """
    Клавиатура виджета: по кнопке на город (индекс в callback_data,
    чтобы не упираться в лимит 64 байта), ввод другого города, обновление.
    """
    buttons = []
    row = []
    for i, city in enumerate(cities):
        label = f"📍 {city}" if city == selected else city
        row.append(InlineKeyboardButton(label[:30], callback_data=f"{CITY_CALLBACK_PREFIX}{i}"))
        if len(row) == 3:
            buttons.append(row)
            row = []
    if row:
        buttons.append(row)

    if custom_location:
        buttons.append([InlineKeyboardButton(f"✅ Установить: {custom_location[:20]}", callback_data=CUSTOM_SUBMIT_CALLBACK)])
    buttons.append([
        InlineKeyboardButton("⌨️ Другой город", callback_data=CUSTOM_CALLBACK),
        InlineKeyboardButton("🔄 Обновить", callback_data=REFRESH_CALLBACK)
    ])
    buttons.append([InlineKeyboardButton("🏠 В главное меню", callback_data=MAIN_MENU_CALLBACK)])
    return InlineKeyboardMarkup(buttons)
