"""BlockCypher wallet lookups for Wallet Explorer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from wallet_explorer.shared.logging import get_logger, redact_fields
from wallet_explorer.shared.network import NetworkClient, NetworkError, TimeoutConfig
from wallet_explorer.wallet import Wallet, WalletType

DEFAULT_API_URL = "https://api.blockcypher.com/v1"
DEFAULT_TX_LIMIT = 50


class WalletFetchError(Exception):
    """A wallet could not be fetched or decoded."""

    def __init__(
        self,
        address: str,
        wallet_type: WalletType,
        original_error: Exception | None = None,
    ):
        self.address = address
        self.wallet_type = wallet_type
        self.original_error = original_error
        detail = f": {original_error}" if original_error else ""
        super().__init__(
            f"Could not fetch {wallet_type.value} wallet {address}{detail}"
        )


@dataclass
class ServiceConfig:
    api_url: str = DEFAULT_API_URL
    token: str | None = None
    tx_limit: int = DEFAULT_TX_LIMIT
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)

    @classmethod
    def from_environment(cls) -> "ServiceConfig":
        try:
            tx_limit = int(os.getenv("WALLET_EXPLORER_TX_LIMIT", DEFAULT_TX_LIMIT))
        except ValueError:
            tx_limit = DEFAULT_TX_LIMIT

        return cls(
            api_url=os.getenv("BLOCKCYPHER_API_URL", DEFAULT_API_URL),
            token=os.getenv("BLOCKCYPHER_TOKEN") or None,
            tx_limit=tx_limit,
        )


class WalletService:
    def __init__(
        self,
        config: ServiceConfig | None = None,
        client: NetworkClient | None = None,
    ):
        self.config = config or ServiceConfig()
        self.client = client or NetworkClient(
            self.config.api_url, timeout_config=self.config.timeout_config
        )

    def _params(self) -> dict[str, str | int]:
        params: dict[str, str | int] = {"limit": self.config.tx_limit}
        if self.config.token:
            params["token"] = self.config.token
        return params

    def fetch_wallet(self, address: str, wallet_type: WalletType) -> Wallet:
        log = get_logger(__name__, address=address, coin=wallet_type.coin)
        endpoint = f"/{wallet_type.coin}/main/addrs/{address}/full"
        params = self._params()
        log.info("Fetching wallet")
        log.debug(
            "GET %s", endpoint, extra={"context": {"params": redact_fields(params)}}
        )
        try:
            data = self.client.get(
                endpoint,
                context=f"{wallet_type.title} wallet lookup",
                params=params,
            )
            wallet = Wallet.from_dict(data)
        except NetworkError as e:
            raise WalletFetchError(address, wallet_type, e) from e
        except (TypeError, ValueError, AttributeError) as e:
            log.error("Malformed wallet payload", exc_info=True)
            raise WalletFetchError(address, wallet_type, e) from e

        log.info("Fetched wallet with %d transactions", len(wallet.txs))
        return wallet
