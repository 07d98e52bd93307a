import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import keyboards
from config import BotConfig
from number_format import CRYPTO_FRACTION, format_number, format_timestamp

log = logging.getLogger(__name__)

MAIN_MENU_TEXT = (
    "🤖 *SafeMoneyRobot*\n\n"
    "Merhaba! Kripto para fiyatlarını görmek veya dönüşüm yapmak için aşağıdaki menüyü kullanabilirsiniz."
)
PRICES_HEADER = "💰 *Güncel Kripto Para Fiyatları (TL)*\n\n"
PRICES_ERROR_TEXT = "Fiyatlar alınırken bir hata oluştu. Lütfen daha sonra tekrar deneyin."
CONVERSION_MENU_TEXT = "🔄 *Para Çevirici*\n\nLütfen yapmak istediğiniz dönüşüm işlemini seçin:"
CONVERSION_RESULT_HEADER = "💱 *Dönüşüm Sonucu*\n\n"
UNSUPPORTED_PAIR_TEXT = (
    "Desteklenmeyen para birimi. Lütfen TRY ve desteklenen kripto paralar arasında dönüşüm yapın."
)
CONVERSION_ERROR_TEXT = "Dönüşüm yapılırken bir hata oluştu. Lütfen daha sonra tekrar deneyin."
INVALID_AMOUNT_TEXT = "Geçersiz miktar. Lütfen sayısal bir değer girin."
CONVERT_USAGE_TEXT = (
    "Doğru format: /convert [miktar] [kaynak para birimi] [hedef para birimi]\n"
    "Örnek: /convert 100 TRY BTC"
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BotHandlers:
    """Экраны бота: главное меню, прайс, меню конвертации, подсказка, результат.

    telegram: объект с async send_message(chat_id, text, reply_markup=None)
    prices: объект с async get_coin_prices / convert_try_to_crypto / convert_crypto_to_try
    """

    def __init__(self, config: BotConfig, telegram, prices, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.config = config
        self.telegram = telegram
        self.prices = prices
        self.clock = clock or _utcnow

    async def send_main_menu(self, chat_id: int | str) -> None:
        await self.telegram.send_message(chat_id, MAIN_MENU_TEXT, keyboards.main_menu_kb())

    async def send_crypto_prices(self, chat_id: int | str) -> None:
        coins = self.config.supported_coins
        try:
            prices = await self.prices.get_coin_prices(coins)
        except Exception as e:  # noqa: BLE001
            log.exception("Не удалось получить цены %s: %s", ",".join(coins), e)
            await self.telegram.send_message(chat_id, PRICES_ERROR_TEXT)
            return

        lines = [PRICES_HEADER]
        for coin in coins:
            price = prices.get(coin.lower())
            if price:
                lines.append(f"*{coin}*: {format_number(price)} {self.config.fiat_symbol}\n")
        updated = format_timestamp(self.clock(), self.config.display_tz)
        lines.append(f"\n_Son güncelleme: {updated}_")

        await self.telegram.send_message(chat_id, "".join(lines), keyboards.prices_kb())

    async def send_conversion_menu(self, chat_id: int | str) -> None:
        kb = keyboards.conversion_menu_kb(self.config.supported_coins, self.config.fiat)
        await self.telegram.send_message(chat_id, CONVERSION_MENU_TEXT, kb)

    async def send_conversion_prompt(self, chat_id: int | str, from_currency: str, to_currency: str) -> None:
        text = (
            f"Lütfen dönüştürmek istediğiniz {from_currency} miktarını girin.\n\n"
            f"Örnek: /convert 100 {from_currency} {to_currency}"
        )
        await self.telegram.send_message(chat_id, text)

    async def send_invalid_amount(self, chat_id: int | str) -> None:
        await self.telegram.send_message(chat_id, INVALID_AMOUNT_TEXT)

    async def send_convert_usage(self, chat_id: int | str) -> None:
        await self.telegram.send_message(chat_id, CONVERT_USAGE_TEXT)

    async def handle_conversion(self, chat_id: int | str, amount: float, from_currency: str, to_currency: str) -> None:
        fiat = self.config.fiat
        symbol = self.config.fiat_symbol
        try:
            if from_currency == fiat and self.config.is_supported_coin(to_currency):
                result = await self.prices.convert_try_to_crypto(amount, to_currency)
                text = (
                    f"{CONVERSION_RESULT_HEADER}{format_number(amount)} {symbol} = "
                    f"{format_number(result, CRYPTO_FRACTION, CRYPTO_FRACTION)} {to_currency}"
                )
            elif self.config.is_supported_coin(from_currency) and to_currency == fiat:
                result = await self.prices.convert_crypto_to_try(amount, from_currency)
                text = (
                    f"{CONVERSION_RESULT_HEADER}{format_number(amount, CRYPTO_FRACTION)} {from_currency} = "
                    f"{format_number(result)} {symbol}"
                )
            else:
                text = UNSUPPORTED_PAIR_TEXT
        except Exception as e:  # noqa: BLE001
            log.exception("Ошибка конвертации %s %s -> %s: %s", amount, from_currency, to_currency, e)
            await self.telegram.send_message(chat_id, CONVERSION_ERROR_TEXT)
            return

        await self.telegram.send_message(chat_id, text, keyboards.conversion_result_kb())
