"""Tests for QR code scanner functionality."""

from decimal import Decimal

from wallet_explorer.qr_scanner import QRScanner, ScannedQRData
from wallet_explorer.wallet import WalletType

BITCOIN_ADDRESS = "1DEP8i3QJCsomS4BSMY2RpU1upv62aGvhD"
LITECOIN_ADDRESS = "LcHKx8ZbQb1W1zHUbmT3qzgR2PeDDmaCyn"
DOGECOIN_ADDRESS = "DH5yaieqoZN36fDVciNyRueRGvGLR3mr7L"


class TestPlainAddressParsing:
    """Test parsing QR codes that carry only an address."""

    def test_plain_address_keeps_default_type(self):
        result = QRScanner.parse_payment_qr(BITCOIN_ADDRESS, WalletType.BITCOIN)

        assert result.address == BITCOIN_ADDRESS
        assert result.wallet_type == WalletType.BITCOIN
        assert result.error is None

    def test_plain_address_without_default_type(self):
        result = QRScanner.parse_payment_qr(LITECOIN_ADDRESS)

        assert result.address == LITECOIN_ADDRESS
        assert result.wallet_type is None

    def test_surrounding_whitespace_is_ignored(self):
        result = QRScanner.parse_payment_qr(f"  {BITCOIN_ADDRESS}\n")

        assert result.address == BITCOIN_ADDRESS

    def test_empty_string(self):
        """Test parsing empty string returns error."""
        result = QRScanner.parse_payment_qr("")

        assert result.address is None
        assert result.error == "Empty QR data"

    def test_text_that_is_not_an_address(self):
        result = QRScanner.parse_payment_qr("hello world")

        assert result.address is None
        assert result.error == "Not a wallet address"
        assert result.raw_data == "hello world"


class TestPaymentURIParsing:
    """Test parsing `<coin>:<address>` payment URIs."""

    def test_scheme_decides_wallet_type(self):
        result = QRScanner.parse_payment_qr(
            f"dogecoin:{DOGECOIN_ADDRESS}", WalletType.BITCOIN
        )

        assert result.address == DOGECOIN_ADDRESS
        assert result.wallet_type == WalletType.DOGECOIN

    def test_amount_and_label(self):
        result = QRScanner.parse_payment_qr(
            f"litecoin:{LITECOIN_ADDRESS}?amount=0.25&label=Cold%20Storage"
        )

        assert result.wallet_type == WalletType.LITECOIN
        assert result.amount == Decimal("0.25")
        assert result.label == "Cold Storage"

    def test_invalid_amount_is_ignored(self):
        result = QRScanner.parse_payment_qr(f"bitcoin:{BITCOIN_ADDRESS}?amount=lots")

        assert result.address == BITCOIN_ADDRESS
        assert result.amount is None
        assert result.error is None

    def test_slashes_after_scheme(self):
        result = QRScanner.parse_payment_qr(f"bitcoin://{BITCOIN_ADDRESS}")

        assert result.address == BITCOIN_ADDRESS

    def test_unsupported_scheme(self):
        result = QRScanner.parse_payment_qr(f"ethereum:{BITCOIN_ADDRESS}")

        assert result.address is None
        assert result.error == "Unsupported payment scheme: ethereum"


class TestScannerState:
    def test_scanner_not_running_initially(self):
        scanner = QRScanner()

        assert scanner.is_running is False

    def test_stop_without_start(self):
        scanner = QRScanner()
        scanner.stop_scanning()

        assert scanner.is_running is False

    def test_scanned_data_defaults(self):
        data = ScannedQRData()

        assert data.address is None
        assert data.wallet_type is None
        assert data.amount is None
        assert data.error is None
