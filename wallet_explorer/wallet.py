"""Wallet and transaction models for Wallet Explorer.

Amounts are kept in the chain's smallest unit (satoshi for bitcoin) and only
converted for display in `wallet_explorer.shared.formatting`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class WalletType(Enum):
    BITCOIN = "bitcoin"
    LITECOIN = "litecoin"
    DASH = "dash"
    DOGECOIN = "dogecoin"

    @property
    def coin(self) -> str:
        """BlockCypher coin path segment."""
        return _COIN_PATHS[self]

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def title(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_scheme(cls, scheme: str) -> "WalletType | None":
        scheme = scheme.lower()
        for wallet_type in cls:
            if scheme in (wallet_type.value, wallet_type.coin):
                return wallet_type
        return None


_COIN_PATHS = {
    WalletType.BITCOIN: "btc",
    WalletType.LITECOIN: "ltc",
    WalletType.DASH: "dash",
    WalletType.DOGECOIN: "doge",
}

_SYMBOLS = {
    WalletType.BITCOIN: "BTC",
    WalletType.LITECOIN: "LTC",
    WalletType.DASH: "DASH",
    WalletType.DOGECOIN: "DOGE",
}

_ICONS = {
    WalletType.BITCOIN: "₿",
    WalletType.LITECOIN: "Ł",
    WalletType.DASH: "Đ",
    WalletType.DOGECOIN: "Ð",
}

WALLET_TYPES: list[WalletType] = [
    WalletType.BITCOIN,
    WalletType.LITECOIN,
    WalletType.DASH,
    WalletType.DOGECOIN,
]


class WalletDescription(Enum):
    COINBASE = "Coinbase"
    EXODUS_WALLET = "Exodus"
    COLD_STORAGE = "Cold Storage"
    LEDGER_NANO = "Ledger Nano"
    TREZOR = "Trezor"

    @property
    def title(self) -> str:
        return self.value


WALLET_DESCRIPTIONS: list[WalletDescription] = list(WalletDescription)


def parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("Unparseable timestamp: %s", value)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Transaction:
    hash: str
    total: int
    confirmed: datetime
    confirmations: int = 0
    block_height: int | None = None
    block_index: int | None = None
    fees: int = 0

    @property
    def is_confirmed(self) -> bool:
        return self.confirmations > 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        # Unconfirmed transactions carry only the time the node received them.
        confirmed = parse_timestamp(data.get("confirmed")) or parse_timestamp(
            data.get("received")
        )
        if confirmed is None:
            confirmed = datetime.fromtimestamp(0, tz=timezone.utc)

        block_height = data.get("block_height")
        if block_height is not None and int(block_height) < 0:
            block_height = None

        block_index = data.get("block_index")
        return cls(
            hash=data.get("hash", ""),
            total=int(data.get("total", 0)),
            confirmed=confirmed,
            confirmations=int(data.get("confirmations", 0)),
            block_height=int(block_height) if block_height is not None else None,
            block_index=int(block_index) if block_index is not None else None,
            fees=int(data.get("fees", 0)),
        )


@dataclass(frozen=True)
class Wallet:
    address: str
    balance: int = 0
    final_balance: int = 0
    total_received: int = 0
    total_sent: int = 0
    txs: tuple[Transaction, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Wallet":
        txs = tuple(Transaction.from_dict(tx) for tx in data.get("txs") or [])
        return cls(
            address=data.get("address", ""),
            balance=int(data.get("balance", 0)),
            final_balance=int(data.get("final_balance", data.get("balance", 0))),
            total_received=int(data.get("total_received", 0)),
            total_sent=int(data.get("total_sent", 0)),
            txs=txs,
        )

    def find_transaction(self, tx_hash: str) -> Transaction | None:
        for tx in self.txs:
            if tx.hash == tx_hash:
                return tx
        return None
