from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from telegram import Update as TgUpdate

log = logging.getLogger(__name__)


class MalformedUpdateError(ValueError):
    """Апдейт не удалось разобрать в сообщение или нажатие кнопки."""


class ConvertUsageError(ValueError):
    """Неверное количество аргументов у /convert."""


class InvalidAmountError(ValueError):
    """Сумма в /convert не является конечным числом."""


@dataclass(frozen=True)
class IncomingMessage:
    chat_id: int | str
    text: Optional[str] = None


@dataclass(frozen=True)
class CallbackEvent:
    id: str
    chat_id: int | str
    message_id: Optional[int]
    data: str


Update = Union[IncomingMessage, CallbackEvent]


@dataclass(frozen=True)
class ConversionRequest:
    amount: float
    from_currency: str
    to_currency: str


def parse_update(payload: Dict[str, Any]) -> Optional[Update]:
    """Разбирает JSON апдейта от Telegram.

    Возвращает None для типов апдейтов, которые бот не обрабатывает
    (edited_message, channel_post и т.п.).
    """
    if not isinstance(payload, dict):
        raise MalformedUpdateError(f"update must be an object, got {type(payload).__name__}")
    try:
        update = TgUpdate.de_json(payload, None)
    except (TypeError, KeyError, ValueError, AttributeError) as e:
        raise MalformedUpdateError(f"cannot decode update: {e}") from e
    if update is None:
        raise MalformedUpdateError("empty update")

    if update.message is not None:
        return IncomingMessage(chat_id=update.message.chat.id, text=update.message.text)

    query = update.callback_query
    if query is not None:
        # без исходного сообщения некуда отвечать
        if query.message is None:
            raise MalformedUpdateError(f"callback_query {query.id} has no message")
        return CallbackEvent(
            id=query.id,
            chat_id=query.message.chat.id,
            message_id=query.message.message_id,
            data=query.data or "",
        )

    log.debug("Пропускаю апдейт %s без message/callback_query", update.update_id)
    return None


def parse_convert_command(text: str) -> ConversionRequest:
    """`/convert <amount> <from> <to>` -> ConversionRequest.

    Коды валют приводятся к верхнему регистру, но не проверяются:
    пару проверяет обработчик конвертации.
    """
    parts = text.split()
    if len(parts) != 4:
        raise ConvertUsageError(f"expected 4 tokens, got {len(parts)}")
    try:
        amount = float(parts[1])
    except ValueError as e:
        raise InvalidAmountError(parts[1]) from e
    if not math.isfinite(amount):
        raise InvalidAmountError(parts[1])
    return ConversionRequest(
        amount=amount,
        from_currency=parts[2].upper(),
        to_currency=parts[3].upper(),
    )
