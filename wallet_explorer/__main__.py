"""Main application entry point for Wallet Explorer."""

import logging
from typing import cast

from textual.app import App
from textual.screen import Screen

from wallet_explorer.coordinator import WalletCoordinator
from wallet_explorer.features.wallets.service import ServiceConfig, WalletService
from wallet_explorer.routes import Presentation, ViewState
from wallet_explorer.screens import (
    NoticeScreen,
    RouteScreen,
    WalletActionRequested,
    screen_for,
)
from wallet_explorer.shared.clipboard import ClipboardWriter
from wallet_explorer.shared.logging import get_logger, setup_logging
from wallet_explorer.styles import CSS

logger = logging.getLogger(__name__)


class WalletExplorerApp(App):
    """Textual front end; implements `WalletRoutable` for the coordinator."""

    CSS = CSS
    TITLE = "Wallet Explorer"

    BINDINGS = [("q", "quit", "Quit")]

    def __init__(self, coordinator: WalletCoordinator | None = None):
        super().__init__()
        self.coordinator = coordinator or WalletCoordinator(
            fetch_wallet=WalletService(ServiceConfig.from_environment()).fetch_wallet,
            write_clipboard=ClipboardWriter(),
        )
        self.coordinator.router = self
        self.coordinator.call_on_main = self.call_from_thread
        self._route_screens: list[RouteScreen] = []
        self._modal: Screen | None = None

    def on_mount(self) -> None:
        root = cast(RouteScreen, screen_for(self.coordinator.state))
        self._route_screens = [root]
        self.push_screen(root)

    def on_wallet_action_requested(self, event: WalletActionRequested) -> None:
        self.coordinator.dispatch(event.action)

    def handle_route(self, state: ViewState, presentation: Presentation) -> None:
        logger.debug("Route %s (%s)", type(state).__name__, presentation.value)

        if presentation is Presentation.MODAL:
            self.dismiss_route()
            self._modal = screen_for(state)
            self.push_screen(self._modal)
        elif presentation is Presentation.REPLACE:
            top = self._route_screens[-1]
            if type(top.state) is type(state):
                top.update_state(state)
            else:
                replacement = cast(RouteScreen, screen_for(state))
                self._route_screens[-1] = replacement
                self.switch_screen(replacement)
        elif presentation is Presentation.ROOT:
            while len(self._route_screens) > 1:
                self.pop_route()
            self._route_screens[0].update_state(state)
        else:
            screen = cast(RouteScreen, screen_for(state))
            self._route_screens.append(screen)
            self.push_screen(screen)

    def dismiss_route(self) -> None:
        if self._modal is None:
            return
        if self.screen is self._modal:
            self.pop_screen()
        self._modal = None

    def pop_route(self) -> None:
        if len(self._route_screens) < 2:
            return
        screen = self._route_screens.pop()
        if self.screen is screen:
            self.pop_screen()
        else:
            logger.warning("Popped route %s was not on top", type(screen).__name__)

    def show_notice(self, title, message, on_dismiss=None) -> None:
        def dismissed(_result) -> None:
            if on_dismiss:
                on_dismiss()

        self.push_screen(NoticeScreen(title, message), callback=dismissed)


def main():
    """Entry point for the application."""
    setup_logging()
    get_logger(__name__).info("Starting Wallet Explorer")
    app = WalletExplorerApp()
    app.run()


if __name__ == "__main__":
    main()
