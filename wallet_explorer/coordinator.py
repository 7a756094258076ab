"""Screen coordinator for Wallet Explorer.

`transition` is a pure function from the current `Navigation` and an intent
to the next `Navigation` plus the side effects to perform. `WalletCoordinator`
owns the current navigation, performs those effects through a
`WalletRoutable` (the UI), a clipboard writer and a wallet fetcher, and posts
fetch results back to itself as intents.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Protocol

from wallet_explorer import fixtures
from wallet_explorer.routes import (
    MODAL_STATES,
    AlertOption,
    CopyWalletAddressToClipboard,
    DeliverQRResult,
    Dismiss,
    DismissModal,
    DisplayDefaultWallets,
    DisplayWalletQR,
    Effect,
    FetchWallet,
    NameSelectAlertState,
    Navigation,
    NavigateBack,
    Pop,
    Present,
    Presentation,
    QRDisplayState,
    ScannerState,
    ScanQR,
    SelectedTransaction,
    SelectedTransactionSegment,
    SelectedWallet,
    ShowNotice,
    SortWalletDetail,
    TransactionDetailState,
    TransactionSegmentDetailState,
    TypeSelectAlertState,
    ViewState,
    WalletAction,
    WalletDetailState,
    WalletFetched,
    WalletFetchFailed,
    WalletListState,
    WalletNameSelectAlert,
    WalletTypeSelectAlert,
    WriteClipboard,
)
from wallet_explorer.shared.logging import describe_error, get_logger
from wallet_explorer.viewmodels import (
    LOADING,
    Loaded,
    Loading,
    TransactionSegmentViewProperties,
    WalletDetailSortOrder,
    WalletsViewProperties,
    transaction_detail_properties,
    wallet_detail_properties,
)
from wallet_explorer.wallet import (
    WALLET_DESCRIPTIONS,
    WALLET_TYPES,
    Wallet,
    WalletType,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    navigation: Navigation
    effects: tuple[Effect, ...] = ()

    def then(self, other: Callable[[Navigation], "Transition"]) -> "Transition":
        following = other(self.navigation)
        return Transition(following.navigation, self.effects + following.effects)


def show(navigation: Navigation, state: ViewState) -> Transition:
    """Bring `state` on screen, choosing how it is presented from its kind."""
    if isinstance(state, MODAL_STATES):
        return Transition(
            replace(navigation, modal=state),
            (Present(state, Presentation.MODAL),),
        )

    effects: tuple[Effect, ...] = (Dismiss(),) if navigation.modal is not None else ()

    if isinstance(state, WalletListState):
        return Transition(
            Navigation(stack=(state,)),
            effects + (Present(state, Presentation.ROOT),),
        )

    if type(navigation.top) is type(state):
        return Transition(
            Navigation(stack=navigation.stack[:-1] + (state,)),
            effects + (Present(state, Presentation.REPLACE),),
        )

    return Transition(
        Navigation(stack=navigation.stack + (state,)),
        effects + (Present(state, Presentation.PUSH),),
    )


def replace_top(navigation: Navigation, state: ViewState) -> Transition:
    """Swap the topmost pushed screen's state, leaving any modal open."""
    return Transition(
        replace(navigation, stack=navigation.stack[:-1] + (state,)),
        (Present(state, Presentation.REPLACE),),
    )


def _find_detail_wallet(navigation: Navigation) -> WalletDetailState | None:
    for state in reversed(navigation.stack):
        if isinstance(state, WalletDetailState) and state.wallet is not None:
            return state
    return None


def _symbol(wallet_type: WalletType | None) -> str:
    return wallet_type.symbol if wallet_type else WalletType.BITCOIN.symbol


def _loaded_detail(
    wallet: Wallet,
    wallet_type: WalletType,
    sort_order: WalletDetailSortOrder = WalletDetailSortOrder.RECENT,
    background_image: str = "",
) -> WalletDetailState:
    props = wallet_detail_properties(
        wallet,
        sort_order=sort_order,
        symbol=wallet_type.symbol,
        background_image=background_image,
    )
    return WalletDetailState(
        properties=Loaded(props),
        wallet=wallet,
        wallet_type=wallet_type,
        sort_order=sort_order,
    )


def _selected_wallet(navigation: Navigation, action: SelectedWallet) -> Transition:
    loaded = WalletDetailState(
        properties=Loaded(fixtures.DETAIL_PROPERTIES),
        wallet=fixtures.EXAMPLE_WALLET,
        wallet_type=WalletType.BITCOIN,
    )
    return show(navigation, WalletDetailState(properties=LOADING)).then(
        lambda nav: show(nav, loaded)
    )


def _selected_transaction(
    navigation: Navigation, action: SelectedTransaction
) -> Transition:
    properties = fixtures.TRANSACTION_DETAIL_PROPERTIES
    detail = _find_detail_wallet(navigation)
    if detail is not None and detail.wallet is not None:
        transaction = detail.wallet.find_transaction(action.tx_hash)
        if transaction is not None:
            properties = transaction_detail_properties(
                transaction, _symbol(detail.wallet_type)
            )
    return show(navigation, TransactionDetailState(properties))


def _selected_transaction_segment(
    navigation: Navigation, action: SelectedTransactionSegment
) -> Transition:
    properties = TransactionSegmentViewProperties(title="segment detail")
    return show(navigation, TransactionSegmentDetailState(properties))


def _display_wallet_qr(navigation: Navigation, action: DisplayWalletQR) -> Transition:
    return show(navigation, QRDisplayState(action.address, action.title))


def _scan_qr(navigation: Navigation, action: ScanQR) -> Transition:
    transition = Transition(navigation)
    if isinstance(navigation.top, WalletDetailState):
        # The next scan result replaces whatever detail was showing.
        transition = replace_top(navigation, WalletDetailState(properties=LOADING))
    return transition.then(lambda nav: show(nav, ScannerState(action.wallet_type)))


def _deliver_qr_result(navigation: Navigation, action: DeliverQRResult) -> Transition:
    if action.wallet_type is None:
        return Transition(navigation)

    loading = WalletDetailState(properties=LOADING, wallet_type=action.wallet_type)
    transition = show(navigation, loading)
    return Transition(
        transition.navigation,
        transition.effects + (FetchWallet(action.address, action.wallet_type),),
    )


def _awaiting_fetch(navigation: Navigation, wallet_type: WalletType) -> bool:
    """Whether the loading detail pushed for a `wallet_type` fetch is on top."""
    top = navigation.top
    return (
        isinstance(top, WalletDetailState)
        and isinstance(top.properties, Loading)
        and top.wallet_type is wallet_type
    )


def _wallet_fetched(navigation: Navigation, action: WalletFetched) -> Transition:
    if not _awaiting_fetch(navigation, action.wallet_type):
        logger.info(
            "Dropping fetched wallet %s, its detail screen is no longer shown",
            action.address,
        )
        return Transition(navigation)

    state = _loaded_detail(
        action.wallet,
        action.wallet_type,
        background_image=action.wallet_type.icon,
    )
    return replace_top(navigation, state)


def _wallet_fetch_failed(
    navigation: Navigation, action: WalletFetchFailed
) -> Transition:
    # Only the loading detail pushed for this fetch is popped on dismissal.
    awaiting = _awaiting_fetch(navigation, action.wallet_type)
    notice = ShowNotice(
        title="Oops.",
        message=(
            "We could not find a wallet with that address on the "
            f"{action.wallet_type.title} blockchain."
        ),
        on_dismiss=NavigateBack() if awaiting else None,
    )
    return Transition(navigation, (notice,))


def _copy_wallet_address(
    navigation: Navigation, action: CopyWalletAddressToClipboard
) -> Transition:
    notice = ShowNotice(
        title="Copied.",
        message=f"Wallet address {action.address} has been copied to your clipboard.",
    )
    return Transition(navigation, (WriteClipboard(action.address), notice))


def _display_default_wallets(
    navigation: Navigation, action: DisplayDefaultWallets
) -> Transition:
    properties = WalletsViewProperties(title="Example Wallets", sections=fixtures.SECTIONS)
    return show(navigation, WalletListState(Loaded(properties)))


def _wallet_type_select_alert(
    navigation: Navigation, action: WalletTypeSelectAlert
) -> Transition:
    options = tuple(
        AlertOption(wallet_type.title, ScanQR(wallet_type))
        for wallet_type in WALLET_TYPES
    )
    return show(navigation, TypeSelectAlertState(options))


def _wallet_name_select_alert(
    navigation: Navigation, action: WalletNameSelectAlert
) -> Transition:
    options = tuple(
        AlertOption(description.title, WalletTypeSelectAlert())
        for description in WALLET_DESCRIPTIONS
    )
    return show(navigation, NameSelectAlertState(options))


def _sort_wallet_detail(navigation: Navigation, action: SortWalletDetail) -> Transition:
    top = navigation.top
    if (
        not isinstance(top, WalletDetailState)
        or top.wallet is None
        or top.wallet_type is None
        or not isinstance(top.properties, Loaded)
    ):
        return Transition(navigation)

    state = _loaded_detail(
        top.wallet,
        top.wallet_type,
        sort_order=action.sort_order,
        background_image=top.properties.data.header_properties.background_image,
    )
    return replace_top(navigation, state)


def _navigate_back(navigation: Navigation, action: NavigateBack) -> Transition:
    effects: tuple[Effect, ...] = (Dismiss(),) if navigation.modal is not None else ()
    if len(navigation.stack) < 2:
        return Transition(Navigation(stack=navigation.stack), effects)
    return Transition(Navigation(stack=navigation.stack[:-1]), effects + (Pop(),))


def _dismiss_modal(navigation: Navigation, action: DismissModal) -> Transition:
    if navigation.modal is None:
        return Transition(navigation)
    return Transition(replace(navigation, modal=None), (Dismiss(),))


TRANSITIONS: dict[type, Callable[[Navigation, WalletAction], Transition]] = {
    SelectedWallet: _selected_wallet,
    SelectedTransaction: _selected_transaction,
    SelectedTransactionSegment: _selected_transaction_segment,
    DisplayWalletQR: _display_wallet_qr,
    ScanQR: _scan_qr,
    DeliverQRResult: _deliver_qr_result,
    WalletFetched: _wallet_fetched,
    WalletFetchFailed: _wallet_fetch_failed,
    CopyWalletAddressToClipboard: _copy_wallet_address,
    DisplayDefaultWallets: _display_default_wallets,
    WalletTypeSelectAlert: _wallet_type_select_alert,
    WalletNameSelectAlert: _wallet_name_select_alert,
    SortWalletDetail: _sort_wallet_detail,
    NavigateBack: _navigate_back,
    DismissModal: _dismiss_modal,
}


def transition(navigation: Navigation, action: WalletAction) -> Transition:
    """Apply `action`; intents without a handler leave the navigation as is."""
    handler = TRANSITIONS.get(type(action))
    if handler is None:
        return Transition(navigation)
    return handler(navigation, action)


class WalletRoutable(Protocol):
    def handle_route(self, state: ViewState, presentation: Presentation) -> None: ...

    def dismiss_route(self) -> None: ...

    def pop_route(self) -> None: ...

    def show_notice(
        self,
        title: str,
        message: str,
        on_dismiss: Callable[[], None] | None = None,
    ) -> None: ...


FetchWalletFn = Callable[[str, WalletType], Wallet]
ClipboardWriteFn = Callable[[str], object]


def _run_in_thread(work: Callable[[], None]) -> None:
    threading.Thread(target=work, daemon=True).start()


def _call_directly(callback: Callable[..., object], *args: object) -> None:
    callback(*args)


class WalletCoordinator:
    """Holds the current navigation and performs transition side effects.

    `dispatch` must be called on the main context. Fetches run through
    `run_in_background` and their results come back through `call_on_main`,
    so every transition happens on the main context. Fetches are one-shot:
    a second scan result starts a second fetch without cancelling the first.
    """

    def __init__(
        self,
        fetch_wallet: FetchWalletFn,
        write_clipboard: ClipboardWriteFn,
        router: WalletRoutable | None = None,
        run_in_background: Callable[[Callable[[], None]], None] = _run_in_thread,
        call_on_main: Callable[..., None] = _call_directly,
    ):
        self.fetch_wallet = fetch_wallet
        self.write_clipboard = write_clipboard
        self.router = router
        self.run_in_background = run_in_background
        self.call_on_main = call_on_main
        self._navigation = Navigation()

    @property
    def navigation(self) -> Navigation:
        return self._navigation

    @property
    def state(self) -> ViewState:
        return self._navigation.current

    def dispatch(self, action: WalletAction) -> None:
        logger.debug("Dispatching %s", type(action).__name__)
        result = transition(self._navigation, action)
        self._navigation = result.navigation
        for effect in result.effects:
            self._perform(effect)

    def _perform(self, effect: Effect) -> None:
        if isinstance(effect, FetchWallet):
            self._start_fetch(effect.address, effect.wallet_type)
        elif isinstance(effect, WriteClipboard):
            self.write_clipboard(effect.text)
        elif self.router is None:
            logger.debug("No router attached, skipping %s", type(effect).__name__)
        elif isinstance(effect, Present):
            self.router.handle_route(effect.state, effect.presentation)
        elif isinstance(effect, Dismiss):
            self.router.dismiss_route()
        elif isinstance(effect, Pop):
            self.router.pop_route()
        elif isinstance(effect, ShowNotice):
            self.router.show_notice(
                effect.title, effect.message, self._dismiss_callback(effect.on_dismiss)
            )

    def _dismiss_callback(
        self, action: WalletAction | None
    ) -> Callable[[], None] | None:
        if action is None:
            return None

        def on_dismiss() -> None:
            self.dispatch(action)

        return on_dismiss

    def _start_fetch(self, address: str, wallet_type: WalletType) -> None:
        fetch_log = get_logger(
            __name__, address=address, wallet_type=wallet_type.value
        )

        def worker() -> None:
            result: WalletAction
            fetch_log.debug("Fetch started")
            try:
                wallet = self.fetch_wallet(address, wallet_type)
            except Exception as e:
                fetch_log.error(
                    "Fetch failed: %s (%s)", e, describe_error(e), exc_info=True
                )
                result = WalletFetchFailed(address, wallet_type, e)
            else:
                result = WalletFetched(address, wallet_type, wallet)
            self.call_on_main(self.dispatch, result)

        self.run_in_background(worker)
