"""Wallet lookup feature module for Wallet Explorer."""

from wallet_explorer.features.wallets.service import (
    ServiceConfig,
    WalletFetchError,
    WalletService,
)

__all__ = ["ServiceConfig", "WalletFetchError", "WalletService"]
