"""Feature modules for Wallet Explorer.

- wallets: BlockCypher wallet lookups
"""

from wallet_explorer.features import wallets

__all__ = ["wallets"]
