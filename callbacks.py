"""
callback_data кнопок бота и их разбор.

Кнопки шлют строку callback_data, здесь она превращается в один из
закрытого набора вариантов. Разбор чистый, без сети, чтобы тестировать
отдельно от HTTP.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

PRICES = "prices"
CONVERT_MENU = "convert_menu"
MAIN_MENU = "main_menu"
CONVERT_TO_TRY_PREFIX = "convert_to_try_"
CONVERT_FROM_TRY_PREFIX = "convert_from_try_"


@dataclass(frozen=True)
class ShowPrices:
    pass


@dataclass(frozen=True)
class ShowConversionMenu:
    pass


@dataclass(frozen=True)
class ShowMainMenu:
    pass


@dataclass(frozen=True)
class ConvertToFiat:
    """Монета -> TRY."""

    code: str


@dataclass(frozen=True)
class ConvertFromFiat:
    """TRY -> монета."""

    code: str


@dataclass(frozen=True)
class Unknown:
    data: str


CallbackKind = Union[ShowPrices, ShowConversionMenu, ShowMainMenu, ConvertToFiat, ConvertFromFiat, Unknown]


def convert_to_try_data(code: str) -> str:
    return f"{CONVERT_TO_TRY_PREFIX}{code}"


def convert_from_try_data(code: str) -> str:
    return f"{CONVERT_FROM_TRY_PREFIX}{code}"


def parse_callback_data(data: str | None) -> CallbackKind:
    data = data or ""
    if data == PRICES:
        return ShowPrices()
    if data == CONVERT_MENU:
        return ShowConversionMenu()
    if data == MAIN_MENU:
        return ShowMainMenu()
    if data.startswith(CONVERT_TO_TRY_PREFIX):
        return ConvertToFiat(data[len(CONVERT_TO_TRY_PREFIX):])
    if data.startswith(CONVERT_FROM_TRY_PREFIX):
        return ConvertFromFiat(data[len(CONVERT_FROM_TRY_PREFIX):])
    return Unknown(data)
