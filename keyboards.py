from typing import Iterable

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

import callbacks

BACK_TO_MAIN = "⬅️ Ana Menü"


def _back_row() -> list[InlineKeyboardButton]:
    return [InlineKeyboardButton(BACK_TO_MAIN, callback_data=callbacks.MAIN_MENU)]


def main_menu_kb() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton("💰 Güncel Fiyatlar", callback_data=callbacks.PRICES)],
        [InlineKeyboardButton("🔄 Para Çevirici", callback_data=callbacks.CONVERT_MENU)],
    ])


def prices_kb() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton("🔄 Yenile", callback_data=callbacks.PRICES)],
        _back_row(),
    ])


def conversion_menu_kb(coins: Iterable[str], fiat: str = "TRY") -> InlineKeyboardMarkup:
    """По строке на монету: fiat -> монета, монета -> fiat."""
    rows = [
        [
            InlineKeyboardButton(f"{fiat} → {coin}", callback_data=callbacks.convert_from_try_data(coin)),
            InlineKeyboardButton(f"{coin} → {fiat}", callback_data=callbacks.convert_to_try_data(coin)),
        ]
        for coin in coins
    ]
    rows.append(_back_row())
    return InlineKeyboardMarkup(rows)


def conversion_result_kb() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton("🔄 Başka Bir Dönüşüm", callback_data=callbacks.CONVERT_MENU)],
        _back_row(),
    ])
