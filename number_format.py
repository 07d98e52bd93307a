"""
Форматирование чисел и времени в турецкой локали (tr-TR).

1234567.891 -> "1.234.567,891", разделитель тысяч ".", дробной части ",".
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional
from zoneinfo import ZoneInfo

THOUSANDS_SEP = "."
DECIMAL_SEP = ","

DEFAULT_MAX_FRACTION = 3
CRYPTO_FRACTION = 8


def _group_thousands(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.append(digits[-3:])
        digits = digits[:-3]
    groups.append(digits)
    return THOUSANDS_SEP.join(reversed(groups))


def format_number(
    value: float,
    max_fraction_digits: int = DEFAULT_MAX_FRACTION,
    min_fraction_digits: int = 0,
) -> str:
    """Число -> строка в tr-TR.

    Округление половины от нуля на max_fraction_digits, хвостовые нули
    срезаются, но не короче min_fraction_digits.
    """
    if min_fraction_digits > max_fraction_digits:
        raise ValueError("min_fraction_digits > max_fraction_digits")

    # repr даёт кратчайшее точное представление float
    d = Decimal(repr(float(value)))
    if not d.is_finite():
        raise ValueError(f"cannot format non-finite value {value!r}")

    with localcontext() as ctx:
        # целая часть + max_fraction_digits знаков должны влезть целиком
        ctx.prec = max(60, d.adjusted() + max_fraction_digits + 2)
        quant = Decimal(1).scaleb(-max_fraction_digits)
        d = d.quantize(quant, rounding=ROUND_HALF_UP)
    text = format(abs(d), "f")

    int_part, _, frac_part = text.partition(".")
    frac_part = frac_part.rstrip("0")
    if len(frac_part) < min_fraction_digits:
        frac_part = frac_part.ljust(min_fraction_digits, "0")

    out = _group_thousands(int_part)
    if frac_part:
        out += DECIMAL_SEP + frac_part
    # -0,0001 с max 3 даёт ноль, знак не нужен
    if d < 0:
        out = "-" + out
    return out


def format_timestamp(moment: Optional[datetime] = None, tz_name: str = "Europe/Istanbul") -> str:
    """Время в зоне tz_name: DD.MM.YYYY HH:MM:SS (24 часа)."""
    tz = ZoneInfo(tz_name)
    if moment is None:
        moment = datetime.now(tz)
    else:
        moment = moment.astimezone(tz)
    return moment.strftime("%d.%m.%Y %H:%M:%S")
