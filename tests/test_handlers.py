from __future__ import annotations

from datetime import datetime, timezone

import pytest

from coingecko import PriceSourceError
from fakes import FakePrices, FakeTelegram
from handlers import (
    CONVERSION_ERROR_TEXT,
    CONVERSION_MENU_TEXT,
    MAIN_MENU_TEXT,
    PRICES_ERROR_TEXT,
    UNSUPPORTED_PAIR_TEXT,
    BotHandlers,
)

FIXED_NOW = datetime(2024, 1, 15, 9, 30, 5, tzinfo=timezone.utc)

RESULT_KB = {
    "inline_keyboard": [
        [{"text": "🔄 Başka Bir Dönüşüm", "callback_data": "convert_menu"}],
        [{"text": "⬅️ Ana Menü", "callback_data": "main_menu"}],
    ]
}


def _handlers(config, prices: FakePrices | None = None) -> tuple[BotHandlers, FakeTelegram, FakePrices]:
    telegram = FakeTelegram()
    prices = prices or FakePrices()
    return BotHandlers(config, telegram, prices, clock=lambda: FIXED_NOW), telegram, prices


@pytest.mark.anyio
async def test_main_menu(config) -> None:
    handlers, telegram, _ = _handlers(config)
    await handlers.send_main_menu(42)

    [sent] = telegram.sent
    assert sent.chat_id == 42
    assert sent.text == MAIN_MENU_TEXT
    assert sent.reply_markup == {
        "inline_keyboard": [
            [{"text": "💰 Güncel Fiyatlar", "callback_data": "prices"}],
            [{"text": "🔄 Para Çevirici", "callback_data": "convert_menu"}],
        ]
    }


@pytest.mark.anyio
async def test_main_menu_is_repeatable(config) -> None:
    handlers, telegram, _ = _handlers(config)
    await handlers.send_main_menu(42)
    await handlers.send_main_menu(42)

    assert telegram.sent[0] == telegram.sent[1]


@pytest.mark.anyio
async def test_price_listing_in_display_order(config) -> None:
    prices = FakePrices(quotes={"usdt": 34.12, "btc": 2345678.9, "doge": 0})
    handlers, telegram, prices = _handlers(config, prices)

    await handlers.send_crypto_prices(42)

    assert prices.calls == [("get_coin_prices", ("BTC", "USDT", "TRX", "XMR", "DOGE"))]
    [sent] = telegram.sent
    assert sent.text == (
        "💰 *Güncel Kripto Para Fiyatları (TL)*\n\n"
        "*BTC*: 2.345.678,9 ₺\n"
        "*USDT*: 34,12 ₺\n"
        "\n_Son güncelleme: 15.01.2024 12:30:05_"
    )
    assert sent.reply_markup == {
        "inline_keyboard": [
            [{"text": "🔄 Yenile", "callback_data": "prices"}],
            [{"text": "⬅️ Ana Menü", "callback_data": "main_menu"}],
        ]
    }


@pytest.mark.anyio
async def test_price_listing_failure_sends_plain_error(config) -> None:
    handlers, telegram, _ = _handlers(config, FakePrices(error=PriceSourceError("down")))

    await handlers.send_crypto_prices(42)

    assert [(m.text, m.reply_markup) for m in telegram.sent] == [(PRICES_ERROR_TEXT, None)]


@pytest.mark.anyio
async def test_conversion_menu_rows(config) -> None:
    handlers, telegram, _ = _handlers(config)
    await handlers.send_conversion_menu(42)

    [sent] = telegram.sent
    assert sent.text == CONVERSION_MENU_TEXT
    rows = sent.reply_markup["inline_keyboard"]
    assert len(rows) == 6
    assert rows[0] == [
        {"text": "TRY → BTC", "callback_data": "convert_from_try_BTC"},
        {"text": "BTC → TRY", "callback_data": "convert_to_try_BTC"},
    ]
    assert [row[0]["callback_data"] for row in rows[:5]] == [
        "convert_from_try_BTC",
        "convert_from_try_USDT",
        "convert_from_try_TRX",
        "convert_from_try_XMR",
        "convert_from_try_DOGE",
    ]
    assert rows[-1] == [{"text": "⬅️ Ana Menü", "callback_data": "main_menu"}]


@pytest.mark.anyio
async def test_conversion_prompt(config) -> None:
    handlers, telegram, _ = _handlers(config)
    await handlers.send_conversion_prompt(42, "DOGE", "TRY")

    [sent] = telegram.sent
    assert sent.text == "Lütfen dönüştürmek istediğiniz DOGE miktarını girin.\n\nÖrnek: /convert 100 DOGE TRY"
    assert sent.reply_markup is None


@pytest.mark.anyio
async def test_conversion_fiat_to_crypto(config) -> None:
    handlers, telegram, prices = _handlers(config, FakePrices(conversion=0.0021))

    await handlers.handle_conversion(42, 100.0, "TRY", "BTC")

    assert prices.calls == [("convert_try_to_crypto", 100.0, "BTC")]
    [sent] = telegram.sent
    assert sent.text == "💱 *Dönüşüm Sonucu*\n\n100 ₺ = 0,00210000 BTC"
    assert sent.reply_markup == RESULT_KB


@pytest.mark.anyio
async def test_conversion_with_huge_amount_still_formats(config) -> None:
    handlers, telegram, prices = _handlers(config, FakePrices(conversion=1e50))

    await handlers.handle_conversion(42, 1e58, "TRY", "BTC")

    [sent] = telegram.sent
    assert sent.text == (
        "💱 *Dönüşüm Sonucu*\n\n"
        + "10" + ".000" * 19 + " ₺ = "
        + "100" + ".000" * 16 + ",00000000 BTC"
    )
    assert sent.reply_markup == RESULT_KB


@pytest.mark.anyio
async def test_conversion_crypto_to_fiat(config) -> None:
    handlers, telegram, prices = _handlers(config, FakePrices(conversion=12345.6789))

    await handlers.handle_conversion(42, 0.25, "XMR", "TRY")

    assert prices.calls == [("convert_crypto_to_try", 0.25, "XMR")]
    [sent] = telegram.sent
    assert sent.text == "💱 *Dönüşüm Sonucu*\n\n0,25 XMR = 12.345,679 ₺"
    assert sent.reply_markup == RESULT_KB


@pytest.mark.anyio
@pytest.mark.parametrize(("src", "dst"), [("XRP", "TRY"), ("TRY", "TRY"), ("BTC", "DOGE"), ("TRY", "EUR")])
async def test_conversion_unsupported_pair(config, src: str, dst: str) -> None:
    handlers, telegram, prices = _handlers(config)

    await handlers.handle_conversion(42, 50.0, src, dst)

    assert prices.calls == []
    [sent] = telegram.sent
    assert sent.text == UNSUPPORTED_PAIR_TEXT
    assert sent.reply_markup == RESULT_KB


@pytest.mark.anyio
async def test_conversion_failure_sends_plain_error(config) -> None:
    handlers, telegram, _ = _handlers(config, FakePrices(error=PriceSourceError("down")))

    await handlers.handle_conversion(42, 100.0, "TRY", "BTC")

    assert [(m.text, m.reply_markup) for m in telegram.sent] == [(CONVERSION_ERROR_TEXT, None)]
