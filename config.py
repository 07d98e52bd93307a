import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

# Загружаем .env (локально), на хостинге это не помешает
load_dotenv()


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name, default)
    if value is not None:
        value = value.strip()
    return value or default


def get_env_int(name: str, default: int) -> int:
    try:
        return int(get_env(name) or default)
    except ValueError:
        return default


def env_flag(name: str, default: bool = False) -> bool:
    value = get_env(name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "y")


TELEGRAM_API_BASE = "https://api.telegram.org"
COINGECKO_API_BASE = "https://api.coingecko.com/api/v3"

# Порядок важен: в этом порядке монеты показываются в прайсе и меню
SUPPORTED_COINS: Tuple[str, ...] = ("BTC", "USDT", "TRX", "XMR", "DOGE")

FIAT = "TRY"
FIAT_SYMBOL = "₺"
DISPLAY_TZ = "Europe/Istanbul"

# Какие апдейты просим у Telegram при setWebhook
ALLOWED_UPDATES = ("message", "callback_query")


@dataclass(frozen=True)
class BotConfig:
    """Настройки бота. Собираются один раз при старте и передаются явно."""

    bot_token: str
    supported_coins: Tuple[str, ...] = SUPPORTED_COINS
    fiat: str = FIAT
    fiat_symbol: str = FIAT_SYMBOL
    display_tz: str = DISPLAY_TZ
    telegram_api_base: str = TELEGRAM_API_BASE
    coingecko_api_base: str = COINGECKO_API_BASE
    webhook_base: Optional[str] = None
    webhook_secret: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 10000
    allowed_updates: Tuple[str, ...] = field(default=ALLOWED_UPDATES)

    @property
    def webhook_url(self) -> Optional[str]:
        if not self.webhook_base:
            return None
        return self.webhook_base.rstrip("/") + "/webhook"

    def is_supported_coin(self, code: str) -> bool:
        return code in self.supported_coins


def load_config() -> BotConfig:
    """Читает переменные окружения (и .env) в BotConfig."""
    return BotConfig(
        bot_token=get_env("TELEGRAM_BOT_TOKEN", "") or "",
        telegram_api_base=get_env("TELEGRAM_API_BASE", TELEGRAM_API_BASE),
        coingecko_api_base=get_env("COINGECKO_API_BASE", COINGECKO_API_BASE),
        webhook_base=get_env("WEBHOOK_BASE"),
        webhook_secret=get_env("WEBHOOK_SECRET"),
        host=get_env("HOST", "0.0.0.0"),
        port=get_env_int("PORT", 10000),
    )
