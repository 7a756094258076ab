"""Example data shown before the user has scanned a real wallet."""

from __future__ import annotations

from datetime import datetime, timezone

from wallet_explorer.shared.formatting import format_amount
from wallet_explorer.viewmodels import (
    TransactionDetailViewProperties,
    WalletDetailViewProperties,
    WalletRowItemProperties,
    WalletsSectionProperties,
    recent_wallet_detail_properties,
    transaction_detail_properties,
)
from wallet_explorer.wallet import Transaction, Wallet, WalletDescription, WalletType


def _utc(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


EXAMPLE_TRANSACTIONS: tuple[Transaction, ...] = (
    Transaction(
        hash="f854aebae95150b379cc1187d848d58225f3c4157fe992bcd166f58bd5063449",
        total=70320221545,
        confirmed=_utc(2014, 3, 29, 1, 29),
        confirmations=64034,
        block_height=293000,
        block_index=58,
    ),
    Transaction(
        hash="16b4ae2e1d4a1a7d07c6f6d3a25e0a1bba5b7d8b6f3b6fb8bd3d5e0a1c2b3a4d",
        total=2500000,
        confirmed=_utc(2014, 3, 2, 18, 5),
        confirmations=64512,
        block_height=289921,
        block_index=12,
    ),
    Transaction(
        hash="9c6a3f1a4b5e2d7c8f0e1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1c2d",
        total=15000000,
        confirmed=_utc(2014, 6, 14, 9, 41),
        confirmations=3,
        block_height=305411,
        block_index=201,
    ),
)

EXAMPLE_WALLET = Wallet(
    address="1DEP8i3QJCsomS4BSMY2RpU1upv62aGvhD",
    balance=337721545,
    final_balance=337721545,
    total_received=70337721545,
    total_sent=70000000000,
    txs=EXAMPLE_TRANSACTIONS,
)

DETAIL_PROPERTIES: WalletDetailViewProperties = recent_wallet_detail_properties(
    EXAMPLE_WALLET
)

TRANSACTION_DETAIL_PROPERTIES: TransactionDetailViewProperties = (
    transaction_detail_properties(EXAMPLE_TRANSACTIONS[0])
)

_EXAMPLE_ROWS: tuple[tuple[WalletDescription, WalletType, str, int], ...] = (
    (
        WalletDescription.COINBASE,
        WalletType.BITCOIN,
        "1DEP8i3QJCsomS4BSMY2RpU1upv62aGvhD",
        337721545,
    ),
    (
        WalletDescription.LEDGER_NANO,
        WalletType.LITECOIN,
        "LbcFwP5qVsUnS9v7d1ts9iUTWYMR5rfhuZ",
        120000000,
    ),
    (
        WalletDescription.COLD_STORAGE,
        WalletType.DOGECOIN,
        "DH5yaieqoZN36fDVciNyRueRGvGLR3mr7L",
        2500000000000,
    ),
)

SECTIONS: tuple[WalletsSectionProperties, ...] = (
    WalletsSectionProperties(
        title="Example Wallets",
        items=tuple(
            WalletRowItemProperties(
                name=description.title,
                address=address,
                balance=format_amount(balance, wallet_type.symbol),
                wallet_type=wallet_type.value,
            )
            for description, wallet_type, address, balance in _EXAMPLE_ROWS
        ),
    ),
)
