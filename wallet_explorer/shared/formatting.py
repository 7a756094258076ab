"""Display formatting helpers for amounts and dates."""

from __future__ import annotations

import calendar
from datetime import datetime
from decimal import Decimal

SATOSHI_PER_COIN = Decimal(100_000_000)
DISPLAY_DECIMALS = 8
CONFIRMATION_DISPLAY_CAP = 6

MONTH_NAMES: list[str] = [calendar.month_name[i] for i in range(1, 13)]


def satoshi_to_coin(amount: int) -> Decimal:
    return Decimal(amount) / SATOSHI_PER_COIN


def format_decimal(value: Decimal, places: int = DISPLAY_DECIMALS) -> str:
    quantum = Decimal(1).scaleb(-places)
    return f"{value.quantize(quantum):f}"


def with_postfix(text: str, symbol: str = "BTC") -> str:
    return f"{text} {symbol}"


def format_amount(amount: int, symbol: str = "BTC") -> str:
    """Format a smallest-unit amount, e.g. 150000000 -> '1.50000000 BTC'."""
    return with_postfix(format_decimal(satoshi_to_coin(amount)), symbol)


def month_name(value: datetime) -> str:
    return MONTH_NAMES[value.month - 1]


def format_transaction_date(value: datetime) -> str:
    return f"{value.strftime('%b')} {value.day}, {value.year} {value.strftime('%H:%M')}"


def format_confirmations(count: int) -> str:
    if count >= CONFIRMATION_DISPLAY_CAP:
        return f"{CONFIRMATION_DISPLAY_CAP}+"
    return str(count)
