import logging

import callbacks
from config import BotConfig
from handlers import BotHandlers
from models import (
    CallbackEvent,
    ConvertUsageError,
    IncomingMessage,
    InvalidAmountError,
    Update,
    parse_convert_command,
)

log = logging.getLogger(__name__)


class UpdateRouter:
    """Один апдейт -> один обработчик (+ answerCallbackQuery для кнопок)."""

    def __init__(self, config: BotConfig, handlers: BotHandlers, telegram) -> None:
        self.config = config
        self.handlers = handlers
        self.telegram = telegram

    async def handle_update(self, update: Update) -> None:
        if isinstance(update, IncomingMessage):
            await self.handle_message(update)
        elif isinstance(update, CallbackEvent):
            await self.handle_callback_query(update)

    async def handle_message(self, message: IncomingMessage) -> None:
        if not message.text:
            return
        chat_id = message.chat_id
        text = message.text.lower()

        if text in ("/start", "/menu"):
            await self.handlers.send_main_menu(chat_id)
            return

        if text.startswith("/convert"):
            # /convert 100 try btc
            try:
                req = parse_convert_command(text)
            except InvalidAmountError:
                await self.handlers.send_invalid_amount(chat_id)
                return
            except ConvertUsageError:
                await self.handlers.send_convert_usage(chat_id)
                return
            await self.handlers.handle_conversion(chat_id, req.amount, req.from_currency, req.to_currency)

    async def handle_callback_query(self, event: CallbackEvent) -> None:
        chat_id = event.chat_id
        fiat = self.config.fiat
        kind = callbacks.parse_callback_data(event.data)
        try:
            if isinstance(kind, callbacks.ShowPrices):
                await self.handlers.send_crypto_prices(chat_id)
            elif isinstance(kind, callbacks.ShowConversionMenu):
                await self.handlers.send_conversion_menu(chat_id)
            elif isinstance(kind, callbacks.ConvertToFiat):
                await self.handlers.send_conversion_prompt(chat_id, kind.code, fiat)
            elif isinstance(kind, callbacks.ConvertFromFiat):
                await self.handlers.send_conversion_prompt(chat_id, fiat, kind.code)
            elif isinstance(kind, callbacks.ShowMainMenu):
                await self.handlers.send_main_menu(chat_id)
            else:
                log.debug("Неизвестный callback_data %r", event.data)
        finally:
            # Telegram держит «часики» на кнопке, пока не ответим
            await self.telegram.answer_callback_query(event.id)
