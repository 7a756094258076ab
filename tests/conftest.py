from datetime import datetime, timezone

import pytest

from wallet_explorer.coordinator import WalletCoordinator
from wallet_explorer.wallet import Transaction, Wallet


def make_tx(
    tx_hash: str,
    total: int,
    year: int = 2024,
    month: int = 1,
    day: int = 1,
    hour: int = 12,
    confirmations: int = 6,
    **kwargs,
) -> Transaction:
    return Transaction(
        hash=tx_hash,
        total=total,
        confirmed=datetime(year, month, day, hour, tzinfo=timezone.utc),
        confirmations=confirmations,
        **kwargs,
    )


class FakeRouter:
    """Records every call the coordinator makes on the UI."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.notices: list[tuple] = []

    def handle_route(self, state, presentation):
        self.calls.append(("route", state, presentation))

    def dismiss_route(self):
        self.calls.append(("dismiss",))

    def pop_route(self):
        self.calls.append(("pop",))

    def show_notice(self, title, message, on_dismiss=None):
        self.notices.append((title, message, on_dismiss))
        self.calls.append(("notice", title))


class FakeWalletFetcher:
    def __init__(self, wallet: Wallet | None = None, error: Exception | None = None):
        self.wallet = wallet
        self.error = error
        self.requests: list[tuple] = []

    def __call__(self, address, wallet_type):
        self.requests.append((address, wallet_type))
        if self.error is not None:
            raise self.error
        return self.wallet


class FakeClipboard:
    def __init__(self):
        self.writes: list[str] = []

    def __call__(self, text):
        self.writes.append(text)
        return True


@pytest.fixture
def march_june_wallet():
    """Fixture providing a wallet with two March and one June transaction"""
    return Wallet(
        address="1DEP8i3QJCsomS4BSMY2RpU1upv62aGvhD",
        balance=300000000,
        final_balance=300000000,
        total_received=350000000,
        total_sent=50000000,
        txs=(
            make_tx("march-early", 100000000, month=3, day=2),
            make_tx("june", 50000000, month=6, day=14),
            make_tx("march-late", 200000000, month=3, day=29),
        ),
    )


@pytest.fixture
def router():
    return FakeRouter()


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def fetcher(march_june_wallet):
    return FakeWalletFetcher(wallet=march_june_wallet)


@pytest.fixture
def background_jobs():
    """Fixture collecting fetch workers so tests decide when they complete"""
    return []


@pytest.fixture
def coordinator(fetcher, clipboard, router, background_jobs):
    return WalletCoordinator(
        fetch_wallet=fetcher,
        write_clipboard=clipboard,
        router=router,
        run_in_background=background_jobs.append,
    )


@pytest.fixture(autouse=True)
def isolate_home(monkeypatch, tmp_path):
    """Keep log files and environment overrides out of the real home directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in (
        "BLOCKCYPHER_API_URL",
        "BLOCKCYPHER_TOKEN",
        "WALLET_EXPLORER_TX_LIMIT",
        "WALLET_EXPLORER_PREFER_OSC52",
    ):
        monkeypatch.delenv(name, raising=False)
