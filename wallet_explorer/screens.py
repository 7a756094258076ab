"""Screens for the Wallet Explorer application.

Screens never change navigation themselves: they post
`WalletActionRequested` and the app hands the action to the coordinator.
"""

import logging
from typing import cast

import qrcode
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.message import Message
from textual.screen import ModalScreen, Screen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    LoadingIndicator,
    OptionList,
    Static,
)

from wallet_explorer.qr_scanner import QRScanner, ScannedQRData
from wallet_explorer.routes import (
    CopyWalletAddressToClipboard,
    DeliverQRResult,
    DismissModal,
    DisplayDefaultWallets,
    DisplayWalletQR,
    NameSelectAlertState,
    NavigateBack,
    QRDisplayState,
    ScannerState,
    SelectedTransaction,
    SelectedTransactionSegment,
    SelectedWallet,
    SortWalletDetail,
    TransactionDetailState,
    TransactionSegmentDetailState,
    TypeSelectAlertState,
    ViewState,
    WalletAction,
    WalletDetailState,
    WalletListState,
    WalletNameSelectAlert,
)
from wallet_explorer.viewmodels import Loaded, WalletDetailSortOrder
from wallet_explorer.wallet import WalletType

logger = logging.getLogger(__name__)


class WalletActionRequested(Message):
    def __init__(self, action: WalletAction):
        super().__init__()
        self.action = action


class RouteScreen(Screen):
    """A pushed screen rendering one view state."""

    BINDINGS = [("escape", "back", "Back")]

    def __init__(self, state: ViewState):
        super().__init__()
        self.state = state

    def update_state(self, state: ViewState) -> None:
        """Render `state` in the widgets composed for the previous one.

        A screen that is still mounting fills its widgets once mounted.
        """
        self.state = state
        if self.is_mounted:
            self.populate()
        else:
            self.call_later(self.populate)

    def on_mount(self) -> None:
        self.populate()

    def populate(self) -> None:
        """Copy the current state into the mounted widgets."""

    def request(self, action: WalletAction) -> None:
        self.post_message(WalletActionRequested(action))

    def action_back(self) -> None:
        self.request(NavigateBack())


class BaseModalScreen(ModalScreen):
    """Base modal screen; closing it tells the coordinator."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]

    def request(self, action: WalletAction) -> None:
        self.post_message(WalletActionRequested(action))

    def action_close(self) -> None:
        self.request(DismissModal())


class WalletListScreen(RouteScreen):
    BINDINGS = [
        ("n", "new_wallet", "New Wallet"),
        ("d", "default_wallets", "Examples"),
        ("c", "copy_address", "Copy Address"),
        ("r", "show_qr", "QR Code"),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Label("", id="wallets-title")
        yield DataTable(id="wallets-table", cursor_type="row")
        yield LoadingIndicator(id="wallets-loading")
        yield Footer()

    def populate(self) -> None:
        state = cast(WalletListState, self.state)
        loaded = isinstance(state.properties, Loaded)
        table = cast(DataTable, self.query_one("#wallets-table"))
        table.display = loaded
        self.query_one("#wallets-loading").display = not loaded
        if not isinstance(state.properties, Loaded):
            return

        props = state.properties.data
        cast(Label, self.query_one("#wallets-title")).update(props.title)
        table.clear(columns=True)
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Address")
        table.add_column("Balance")
        for section in props.sections:
            for item in section.items:
                table.add_row(
                    item.name, item.wallet_type, item.address, item.balance, key=item.address
                )
        table.focus()

    def _selected_row(self) -> tuple[str, str] | None:
        try:
            table = cast(DataTable, self.query_one("#wallets-table"))
        except NoMatches:
            return None
        if table.row_count == 0:
            return None
        row = table.get_row_at(table.cursor_row)
        return str(row[0]), str(row[2])

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.row_key.value:
            self.request(SelectedWallet(event.row_key.value))

    def action_new_wallet(self) -> None:
        self.request(WalletNameSelectAlert())

    def action_default_wallets(self) -> None:
        self.request(DisplayDefaultWallets())

    def action_copy_address(self) -> None:
        selected = self._selected_row()
        if selected:
            self.request(CopyWalletAddressToClipboard(selected[1]))

    def action_show_qr(self) -> None:
        selected = self._selected_row()
        if selected:
            self.request(DisplayWalletQR(selected[1], selected[0]))


class WalletDetailScreen(RouteScreen):
    BINDINGS = RouteScreen.BINDINGS + [
        ("s", "toggle_sort", "Sort"),
        ("c", "copy_address", "Copy Address"),
        ("r", "show_qr", "QR Code"),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Label("Loading wallet...", id="detail-title")
        yield Static("", id="detail-address")
        yield Horizontal(
            Static("", id="detail-balance", classes="detail-stat"),
            Static("", id="detail-received", classes="detail-stat"),
            Static("", id="detail-sent", classes="detail-stat"),
            id="detail-header",
        )
        yield DataTable(id="transactions-table", cursor_type="row")
        yield LoadingIndicator(id="detail-loading")
        yield Footer()

    def populate(self) -> None:
        state = cast(WalletDetailState, self.state)
        loaded = isinstance(state.properties, Loaded)
        table = cast(DataTable, self.query_one("#transactions-table"))
        for selector in ("#detail-address", "#detail-header", "#transactions-table"):
            self.query_one(selector).display = loaded
        self.query_one("#detail-loading").display = not loaded
        title = cast(Label, self.query_one("#detail-title"))
        if not isinstance(state.properties, Loaded):
            title.update("Loading wallet...")
            table.clear(columns=True)
            return

        props = state.properties.data
        header = props.header_properties
        title.update(f"{header.background_image} {props.title}".strip())
        cast(Static, self.query_one("#detail-address")).update(header.address)
        cast(Static, self.query_one("#detail-balance")).update(f"Balance\n{header.balance}")
        cast(Static, self.query_one("#detail-received")).update(
            f"Received\n{header.received}"
        )
        cast(Static, self.query_one("#detail-sent")).update(f"Sent\n{header.send}")

        table.clear(columns=True)
        table.add_column("Amount")
        table.add_column("Date")
        table.add_column("Conf.")
        table.add_column("Hash")
        for index, section in enumerate(props.sections):
            table.add_row(
                f"[b]{section.title}[/b]", section.sub, "", "", key=f"section-{index}"
            )
            for item in section.items:
                status = "" if item.is_confirmed else " (pending)"
                table.add_row(
                    item.title,
                    item.sub_title + status,
                    item.confirmation_count,
                    item.transaction_hash[:16],
                    key=item.identifier,
                )
        table.focus()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        key = event.row_key.value
        if key and not key.startswith("section-"):
            self.request(SelectedTransaction(key))

    def _address(self) -> str | None:
        state = cast(WalletDetailState, self.state)
        if isinstance(state.properties, Loaded):
            return state.properties.data.header_properties.address
        return None

    def action_toggle_sort(self) -> None:
        state = cast(WalletDetailState, self.state)
        if state.sort_order is WalletDetailSortOrder.RECENT:
            self.request(SortWalletDetail(WalletDetailSortOrder.LARGEST))
        else:
            self.request(SortWalletDetail(WalletDetailSortOrder.RECENT))

    def action_copy_address(self) -> None:
        address = self._address()
        if address:
            self.request(CopyWalletAddressToClipboard(address))

    def action_show_qr(self) -> None:
        address = self._address()
        if address:
            self.request(DisplayWalletQR(address, "Wallet Address"))


class TransactionDetailScreen(RouteScreen):
    BINDINGS = RouteScreen.BINDINGS + [("m", "segments", "Segments")]

    def compose(self) -> ComposeResult:
        props = cast(TransactionDetailState, self.state).properties
        item = props.transaction_item_properties
        yield Header()
        yield Label(item.title, id="tx-title")
        yield Static(f"{item.sub_title}  confirmations: {item.confirmation_count}")
        for section in props.sections:
            yield Label(section.title, classes="section-title")
            for row in section.items:
                yield Static(f"{row.title}: {row.content}", classes="metadata-row")
        yield Footer()

    def action_segments(self) -> None:
        props = cast(TransactionDetailState, self.state).properties
        self.request(
            SelectedTransactionSegment(props.transaction_item_properties.transaction_hash)
        )


class TransactionSegmentScreen(RouteScreen):
    def compose(self) -> ComposeResult:
        props = cast(TransactionSegmentDetailState, self.state).properties
        yield Header()
        yield Label(props.title, id="segment-title")
        if not props.sections:
            yield Static("No segments.")
        for section in props.sections:
            yield Label(section.title, classes="section-title")
            for row in section.items:
                yield Static(f"{row.title}: {row.content}", classes="metadata-row")
        yield Footer()


class QRCodeScreen(BaseModalScreen):
    def __init__(self, state: QRDisplayState):
        super().__init__()
        self.state = state

    def compose(self) -> ComposeResult:
        yield Label(self.state.title or "Wallet Address QR Code")
        yield Label(self.state.address, id="qr-address")
        yield Static(id="qr-display")
        yield Button("Close", id="close-button")

    def on_mount(self) -> None:
        self.generate_qr_code()

    def generate_qr_code(self) -> None:
        qr = qrcode.QRCode(version=1, box_size=1, border=1)
        qr.add_data(self.state.address)
        qr.make(fit=True)

        qr_str = ""
        for row in qr.modules:
            qr_str += "".join(["██" if cell else "  " for cell in row]) + "\n"

        cast(Static, self.query_one("#qr-display")).update(qr_str)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-button":
            self.action_close()


class SelectOptionScreen(BaseModalScreen):
    """Action-sheet style chooser for wallet types and wallet names."""

    def __init__(self, state: TypeSelectAlertState | NameSelectAlertState):
        super().__init__()
        self.state = state

    def compose(self) -> ComposeResult:
        with Vertical(id="select-dialog"):
            yield Label(self.state.title, id="select-title")
            yield Label(self.state.message)
            yield OptionList(
                *[option.title for option in self.state.options], id="select-options"
            )
            yield Button("Cancel", id="cancel-button")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        option = self.state.options[event.option_index]
        logger.info("Selected %s", option.title)
        self.request(option.action)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel-button":
            self.action_close()


class ScannerScreen(BaseModalScreen):
    """Scans with the camera; an address can also be typed in."""

    def __init__(self, state: ScannerState, scanner: QRScanner | None = None):
        super().__init__()
        self.state = state
        self.scanner = scanner or QRScanner()

    def compose(self) -> ComposeResult:
        wallet_type = self.state.wallet_type
        title = f"Scan {wallet_type.title} Address" if wallet_type else "Scan Address"
        with Vertical(id="scanner-dialog"):
            yield Label(title, id="scanner-title")
            yield Static("Starting camera...", id="scanner-status")
            yield Input(placeholder="Or type the address", id="scanner-address-input")
            yield Horizontal(
                Button("Look Up", id="lookup-button", variant="primary"),
                Button("Cancel", id="cancel-button"),
            )

    def on_mount(self) -> None:
        self.scanner.start_scanning(
            on_scan=lambda data: self.app.call_from_thread(self._on_scanned, data),
            on_error=lambda message: self.app.call_from_thread(
                self._on_scan_error, message
            ),
            default_type=self.state.wallet_type,
        )
        cast(Static, self.query_one("#scanner-status")).update(
            "Hold the QR code up to the camera."
        )

    def on_unmount(self) -> None:
        self.scanner.stop_scanning()

    def _on_scan_error(self, message: str) -> None:
        cast(Static, self.query_one("#scanner-status")).update(
            f"[yellow]{message}. Type the address instead.[/yellow]"
        )

    def _on_scanned(self, data: ScannedQRData) -> None:
        if data.error or not data.address:
            self._on_scan_error(data.error or "No address found")
            return
        self.deliver(data.address, data.wallet_type or self.state.wallet_type)

    def deliver(self, address: str, wallet_type: WalletType | None) -> None:
        self.request(DeliverQRResult(address, wallet_type))

    def _submit_typed_address(self) -> None:
        text = cast(Input, self.query_one("#scanner-address-input")).value
        data = QRScanner.parse_payment_qr(text, self.state.wallet_type)
        self._on_scanned(data)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit_typed_address()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "lookup-button":
            self._submit_typed_address()
        elif event.button.id == "cancel-button":
            self.action_close()


class NoticeScreen(ModalScreen[None]):
    """Modal notice with a single OK button."""

    BINDINGS = [("escape", "ok", "OK"), ("enter", "ok", "OK")]

    def __init__(self, title: str, message: str):
        super().__init__()
        self.notice_title = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="notice-dialog"):
            yield Label(self.notice_title, id="notice-title")
            yield Static(self.message, id="notice-message")
            yield Button("ok", id="ok-button", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ok-button":
            self.action_ok()

    def action_ok(self) -> None:
        self.dismiss()


def screen_for(state: ViewState) -> Screen:
    if isinstance(state, WalletListState):
        return WalletListScreen(state)
    if isinstance(state, WalletDetailState):
        return WalletDetailScreen(state)
    if isinstance(state, TransactionDetailState):
        return TransactionDetailScreen(state)
    if isinstance(state, TransactionSegmentDetailState):
        return TransactionSegmentScreen(state)
    if isinstance(state, QRDisplayState):
        return QRCodeScreen(state)
    if isinstance(state, (TypeSelectAlertState, NameSelectAlertState)):
        return SelectOptionScreen(state)
    if isinstance(state, ScannerState):
        return ScannerScreen(state)
    raise TypeError(f"No screen for {type(state).__name__}")
