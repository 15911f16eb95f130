# config/bot_config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv
load_dotenv()

DEFAULT_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_REQUEST_TIMEOUT = 30.0  # секунд

# Стартовый набор городов для быстрого выбора
DEFAULT_CITIES = ("austin", "dallas", "houston")


@dataclass
class BotConfig:
    telegram_token: str
    log_level: str = "INFO"
    geocoding_url: str = DEFAULT_GEOCODING_URL
    forecast_url: str = DEFAULT_FORECAST_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def load(cls):
        return cls(
            telegram_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            geocoding_url=os.getenv("GEOCODING_URL", DEFAULT_GEOCODING_URL),
            forecast_url=os.getenv("FORECAST_URL", DEFAULT_FORECAST_URL),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT))
        )
