"""Intents, view states and side effects exchanged with the coordinator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from wallet_explorer.viewmodels import (
    Loadable,
    Loaded,
    TransactionDetailViewProperties,
    TransactionSegmentViewProperties,
    WalletDetailSortOrder,
    WalletDetailViewProperties,
    WalletsViewProperties,
)
from wallet_explorer.wallet import Wallet, WalletType


# Intents


@dataclass(frozen=True)
class ReloadWallets:
    pass


@dataclass(frozen=True)
class ReloadWallet:
    address: str
    wallet_type: WalletType


@dataclass(frozen=True)
class SelectedWallet:
    address: str


@dataclass(frozen=True)
class ReloadTransaction:
    tx_hash: str


@dataclass(frozen=True)
class SelectedTransaction:
    tx_hash: str


@dataclass(frozen=True)
class ReloadTransactionSegment:
    segment_id: str


@dataclass(frozen=True)
class SelectedTransactionSegment:
    segment_id: str


@dataclass(frozen=True)
class WalletTypeSelectAlert:
    pass


@dataclass(frozen=True)
class WalletNameSelectAlert:
    pass


@dataclass(frozen=True)
class DisplayDefaultWallets:
    pass


@dataclass(frozen=True)
class DisplayWalletQR:
    address: str
    title: str


@dataclass(frozen=True)
class ScanQR:
    wallet_type: WalletType


@dataclass(frozen=True)
class DeliverQRResult:
    address: str
    wallet_type: WalletType | None


@dataclass(frozen=True)
class CopyWalletAddressToClipboard:
    address: str


@dataclass(frozen=True)
class SortWalletDetail:
    sort_order: WalletDetailSortOrder


@dataclass(frozen=True)
class NavigateBack:
    """The user left the topmost pushed screen."""


@dataclass(frozen=True)
class DismissModal:
    """The user closed an alert, scanner or QR display without choosing."""


@dataclass(frozen=True)
class WalletFetched:
    address: str
    wallet_type: WalletType
    wallet: Wallet


@dataclass(frozen=True)
class WalletFetchFailed:
    address: str
    wallet_type: WalletType
    error: Exception = field(compare=False)


WalletAction = Union[
    ReloadWallets,
    ReloadWallet,
    SelectedWallet,
    ReloadTransaction,
    SelectedTransaction,
    ReloadTransactionSegment,
    SelectedTransactionSegment,
    WalletTypeSelectAlert,
    WalletNameSelectAlert,
    DisplayDefaultWallets,
    DisplayWalletQR,
    ScanQR,
    DeliverQRResult,
    CopyWalletAddressToClipboard,
    SortWalletDetail,
    NavigateBack,
    DismissModal,
    WalletFetched,
    WalletFetchFailed,
]


# View states


@dataclass(frozen=True)
class WalletListState:
    properties: Loadable[WalletsViewProperties] = Loaded(WalletsViewProperties())


@dataclass(frozen=True)
class WalletDetailState:
    properties: Loadable[WalletDetailViewProperties]
    wallet: Wallet | None = None
    wallet_type: WalletType | None = None
    sort_order: WalletDetailSortOrder = WalletDetailSortOrder.RECENT


@dataclass(frozen=True)
class TransactionDetailState:
    properties: TransactionDetailViewProperties


@dataclass(frozen=True)
class TransactionSegmentDetailState:
    properties: TransactionSegmentViewProperties


@dataclass(frozen=True)
class QRDisplayState:
    address: str
    title: str


@dataclass(frozen=True)
class AlertOption:
    title: str
    action: WalletAction


@dataclass(frozen=True)
class TypeSelectAlertState:
    options: tuple[AlertOption, ...]
    title: str = "Wallet Type"
    message: str = "Select your Wallet type."


@dataclass(frozen=True)
class NameSelectAlertState:
    options: tuple[AlertOption, ...]
    title: str = "Wallet Name"
    message: str = "Select a name for your new wallet, or input a custom name."


@dataclass(frozen=True)
class ScannerState:
    wallet_type: WalletType | None = None


ViewState = Union[
    WalletListState,
    WalletDetailState,
    TransactionDetailState,
    TransactionSegmentDetailState,
    QRDisplayState,
    TypeSelectAlertState,
    NameSelectAlertState,
    ScannerState,
]

MODAL_STATES = (
    QRDisplayState,
    TypeSelectAlertState,
    NameSelectAlertState,
    ScannerState,
)


@dataclass(frozen=True)
class Navigation:
    """Pushed screens, bottom first, plus an optional modal on top.

    The bottom of the stack is always the wallet list.
    """

    stack: tuple[ViewState, ...] = (WalletListState(),)
    modal: ViewState | None = None

    @property
    def current(self) -> ViewState:
        return self.modal if self.modal is not None else self.stack[-1]

    @property
    def top(self) -> ViewState:
        return self.stack[-1]


# Side effects


class Presentation(Enum):
    PUSH = "push"
    REPLACE = "replace"
    MODAL = "modal"
    ROOT = "root"


@dataclass(frozen=True)
class Present:
    state: ViewState
    presentation: Presentation


@dataclass(frozen=True)
class Dismiss:
    pass


@dataclass(frozen=True)
class Pop:
    pass


@dataclass(frozen=True)
class ShowNotice:
    title: str
    message: str
    on_dismiss: WalletAction | None = None


@dataclass(frozen=True)
class WriteClipboard:
    text: str


@dataclass(frozen=True)
class FetchWallet:
    address: str
    wallet_type: WalletType


Effect = Union[Present, Dismiss, Pop, ShowNotice, WriteClipboard, FetchWallet]
