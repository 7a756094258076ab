"""Wallet Explorer - a terminal BlockCypher wallet browser.

This package is organized into:
- coordinator: the navigation state machine driving every screen
- viewmodels: pure mapping from wallet models to display properties
- features.wallets: BlockCypher wallet lookups
- shared: logging, clipboard, network and formatting utilities
"""

from wallet_explorer.coordinator import WalletCoordinator, transition
from wallet_explorer.features.wallets import WalletFetchError, WalletService
from wallet_explorer.wallet import Transaction, Wallet, WalletType

__version__ = "0.1.0"
__all__ = [
    "Transaction",
    "Wallet",
    "WalletCoordinator",
    "WalletFetchError",
    "WalletService",
    "WalletType",
    "transition",
]
