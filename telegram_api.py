import logging
from typing import Any, Dict, Optional

import httpx
from telegram import InlineKeyboardMarkup
from telegram.constants import ParseMode

from config import BotConfig

log = logging.getLogger(__name__)

TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class TelegramAPIError(Exception):
    """sendMessage вернул не-2xx."""

    def __init__(self, status_code: int, reason: str, payload: Any = None) -> None:
        super().__init__(f"Telegram API error: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
        self.payload = payload


def _error_body(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        return {"description": r.text}


class TelegramClient:
    """Исходящие вызовы Bot API: sendMessage, answerCallbackQuery, setWebhook."""

    def __init__(self, config: BotConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._base = f"{config.telegram_api_base.rstrip('/')}/bot{config.bot_token}"
        self._allowed_updates = list(config.allowed_updates)
        self._transport = transport

    def _url(self, method: str) -> str:
        return f"{self._base}/{method}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=TIMEOUT, transport=self._transport)

    async def send_message(
        self,
        chat_id: int | str,
        text: str,
        reply_markup: Optional[InlineKeyboardMarkup] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": ParseMode.MARKDOWN.value,
        }
        if reply_markup is not None:
            payload["reply_markup"] = reply_markup.to_dict()

        async with self._client() as client:
            r = await client.post(self._url("sendMessage"), json=payload)

        if not r.is_success:
            error_data = _error_body(r)
            log.error("Telegram API error (chat %s): %s", chat_id, error_data)
            raise TelegramAPIError(r.status_code, r.reason_phrase, error_data)
        return r.json()

    async def answer_callback_query(self, callback_query_id: str) -> None:
        """Убирает «часики» с кнопки. Ошибки только логируются."""
        payload = {"callback_query_id": callback_query_id}
        try:
            async with self._client() as client:
                r = await client.post(self._url("answerCallbackQuery"), json=payload)
        except httpx.HTTPError as e:
            log.warning("answerCallbackQuery %s не отправлен: %s", callback_query_id, e)
            return
        if not r.is_success:
            log.warning(
                "answerCallbackQuery %s: %s %s",
                callback_query_id, r.status_code, _error_body(r),
            )

    async def set_webhook(self, url: str, secret_token: Optional[str] = None) -> bool:
        payload: Dict[str, Any] = {"url": url, "allowed_updates": self._allowed_updates}
        if secret_token:
            payload["secret_token"] = secret_token
        try:
            async with self._client() as client:
                r = await client.post(self._url("setWebhook"), json=payload)
        except httpx.HTTPError as e:
            log.warning("setWebhook не удался: %s", e)
            return False
        if not r.is_success:
            log.warning("setWebhook: %s %s", r.status_code, _error_body(r))
            return False
        log.info("Webhook установлен: %s", url)
        return True
