"""View properties and the mapping from wallet models to them.

Everything here is framework-agnostic: screens only read these dataclasses,
and the mapping functions are pure.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Generic, TypeVar, Union

from wallet_explorer.shared.formatting import (
    MONTH_NAMES,
    format_amount,
    format_confirmations,
    format_decimal,
    format_transaction_date,
    month_name,
    satoshi_to_coin,
    with_postfix,
)
from wallet_explorer.wallet import Transaction, Wallet

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Loaded(Generic[T]):
    data: T


Loadable = Union[Loading, Loaded[T]]

LOADING = Loading()


class WalletDetailSortOrder(Enum):
    RECENT = "recent"
    LARGEST = "largest"


class TransactionType(Enum):
    RECEIVED = "received"
    SENT = "sent"


@dataclass(frozen=True)
class TransactionRowItemProperties:
    transaction_hash: str
    transaction_type: TransactionType
    title: str
    sub_title: str
    confirmation_count: str
    is_confirmed: bool
    identifier: str


@dataclass(frozen=True)
class WalletDetailSectionProperties:
    title: str
    items: tuple[TransactionRowItemProperties, ...] = ()
    sub: str = ""


@dataclass(frozen=True)
class WalletDetailHeaderViewProperties:
    balance: str
    received: str
    send: str
    address: str
    title: str = ""
    background_image: str = ""


@dataclass(frozen=True)
class WalletDetailViewProperties:
    title: str
    header_properties: WalletDetailHeaderViewProperties
    sections: tuple[WalletDetailSectionProperties, ...]
    identifier: str
    show_nav_loader: bool = False


@dataclass(frozen=True)
class MetadataRowItemProperties:
    title: str
    content: str


@dataclass(frozen=True)
class MetadataSectionProperties:
    title: str
    items: tuple[MetadataRowItemProperties, ...]
    display_style: str = "metadata"


@dataclass(frozen=True)
class TransactionDetailViewProperties:
    title: str
    transaction_item_properties: TransactionRowItemProperties
    sections: tuple[MetadataSectionProperties, ...]


@dataclass(frozen=True)
class TransactionSegmentViewProperties:
    title: str = ""
    sections: tuple[MetadataSectionProperties, ...] = ()


@dataclass(frozen=True)
class WalletRowItemProperties:
    name: str
    address: str
    balance: str
    wallet_type: str = ""


@dataclass(frozen=True)
class WalletsSectionProperties:
    title: str
    items: tuple[WalletRowItemProperties, ...] = ()


@dataclass(frozen=True)
class WalletsViewProperties:
    title: str = "Wallets"
    sections: tuple[WalletsSectionProperties, ...] = field(default_factory=tuple)


NOT_AVAILABLE = "n/a"


def transaction_row_item(
    transaction: Transaction, symbol: str = "BTC"
) -> TransactionRowItemProperties:
    return TransactionRowItemProperties(
        transaction_hash=transaction.hash,
        # TODO: derive direction once inputs/outputs are mapped onto Transaction.
        transaction_type=TransactionType.RECEIVED,
        title=format_amount(transaction.total, symbol),
        sub_title=format_transaction_date(transaction.confirmed),
        confirmation_count=format_confirmations(transaction.confirmations),
        is_confirmed=transaction.is_confirmed,
        identifier=transaction.hash,
    )


def _optional(value: int | None) -> str:
    return NOT_AVAILABLE if value is None else str(value)


def transaction_detail_properties(
    transaction: Transaction, symbol: str = "BTC"
) -> TransactionDetailViewProperties:
    metadata = MetadataSectionProperties(
        title="Transaction Metadata",
        items=(
            MetadataRowItemProperties("Hash", transaction.hash),
            MetadataRowItemProperties("Block Index", _optional(transaction.block_index)),
            MetadataRowItemProperties(
                "Block Height", _optional(transaction.block_height)
            ),
            MetadataRowItemProperties("Confirmations", str(transaction.confirmations)),
        ),
    )
    return TransactionDetailViewProperties(
        title="detail",
        transaction_item_properties=transaction_row_item(transaction, symbol),
        sections=(metadata,),
    )


def wallet_header_properties(
    wallet: Wallet, symbol: str = "BTC"
) -> WalletDetailHeaderViewProperties:
    return WalletDetailHeaderViewProperties(
        balance=format_amount(wallet.final_balance, symbol),
        received=format_amount(wallet.total_received, symbol),
        send=format_amount(wallet.total_sent, symbol),
        address=wallet.address,
    )


def recent_wallet_detail_properties(
    wallet: Wallet, symbol: str = "BTC"
) -> WalletDetailViewProperties:
    """Group transactions into one section per calendar month.

    Sections follow January..December order and only months holding at least
    one transaction appear. Rows are newest first within a month.
    """
    newest_first = sorted(wallet.txs, key=lambda tx: tx.confirmed, reverse=True)

    sections = []
    for month in MONTH_NAMES:
        transactions = [tx for tx in newest_first if month_name(tx.confirmed) == month]
        if not transactions:
            continue

        total = sum(tx.total for tx in transactions)
        total_text = with_postfix(format_decimal(satoshi_to_coin(total)), symbol)
        sections.append(
            WalletDetailSectionProperties(
                title=month,
                sub=f"Transaction Total: {total_text}",
                items=tuple(transaction_row_item(tx, symbol) for tx in transactions),
            )
        )

    return WalletDetailViewProperties(
        title="New Wallet",
        header_properties=wallet_header_properties(wallet, symbol),
        sections=tuple(sections),
        identifier=wallet.address,
    )


def largest_wallet_detail_properties(
    wallet: Wallet, symbol: str = "BTC"
) -> WalletDetailViewProperties:
    largest_section = WalletDetailSectionProperties(
        title="Largest Transactions",
        items=tuple(
            transaction_row_item(tx, symbol)
            for tx in sorted(wallet.txs, key=lambda tx: tx.total, reverse=True)
        ),
    )
    return WalletDetailViewProperties(
        title="New Wallet",
        header_properties=wallet_header_properties(wallet, symbol),
        sections=(largest_section,),
        identifier=wallet.address,
    )


def wallet_detail_properties(
    wallet: Wallet,
    sort_order: WalletDetailSortOrder = WalletDetailSortOrder.RECENT,
    symbol: str = "BTC",
    background_image: str = "",
) -> WalletDetailViewProperties:
    if sort_order is WalletDetailSortOrder.LARGEST:
        props = largest_wallet_detail_properties(wallet, symbol)
    else:
        props = recent_wallet_detail_properties(wallet, symbol)

    if background_image:
        header = replace(props.header_properties, background_image=background_image)
        props = replace(props, header_properties=header)
    return props
