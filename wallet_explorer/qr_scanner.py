"""QR code scanner for wallet addresses and BIP 21 style payment URIs."""

import logging
import re
import threading
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable
from urllib.parse import parse_qs

from wallet_explorer.wallet import WalletType

logger = logging.getLogger(__name__)

ADDRESS_RE = re.compile(r"^[a-zA-Z0-9]{25,90}$")


@dataclass
class ScannedQRData:
    address: str | None = None
    wallet_type: WalletType | None = None
    amount: Decimal | None = None
    label: str | None = None
    raw_data: str | None = None
    error: str | None = None


class QRScanner:
    def __init__(self):
        self._running = False
        self._capture = None
        self._thread: threading.Thread | None = None
        self._on_scan_callback: Callable[[ScannedQRData], None] | None = None
        self._on_error_callback: Callable[[str], None] | None = None
        self._default_type: WalletType | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    def is_camera_available(self) -> bool:
        try:
            import cv2
        except ImportError as e:
            logger.warning("OpenCV not available: %s", e)
            return False

        capture = cv2.VideoCapture(0)
        available = capture.isOpened()
        capture.release()
        return available

    def start_scanning(
        self,
        on_scan: Callable[[ScannedQRData], None],
        on_error: Callable[[str], None] | None = None,
        default_type: WalletType | None = None,
    ) -> bool:
        if self._running:
            logger.warning("Scanner already running")
            return False

        self._on_scan_callback = on_scan
        self._on_error_callback = on_error
        self._default_type = default_type
        self._running = True

        self._thread = threading.Thread(target=self._scan_loop, daemon=True)
        self._thread.start()
        return True

    def stop_scanning(self) -> None:
        self._running = False
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=2.0)

    def _report_error(self, message: str) -> None:
        logger.error(message)
        if self._on_error_callback:
            self._on_error_callback(message)

    def _scan_loop(self) -> None:
        try:
            import cv2
            from pyzbar import pyzbar
        except ImportError as e:
            self._report_error(f"Required libraries not installed: {e}")
            self._running = False
            return

        try:
            self._capture = cv2.VideoCapture(0)
            if not self._capture.isOpened():
                self._report_error("Could not open camera")
                return

            self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, 640)
            self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, 480)

            while self._running:
                ret, frame = self._capture.read()
                if not ret:
                    continue

                for barcode in pyzbar.decode(frame):
                    if barcode.type != "QRCODE":
                        continue
                    qr_data = barcode.data.decode("utf-8", errors="ignore")
                    logger.info("QR code detected: %s...", qr_data[:50])
                    parsed = self.parse_payment_qr(qr_data, self._default_type)
                    self._running = False
                    if self._on_scan_callback:
                        self._on_scan_callback(parsed)
                    return

        except Exception as e:
            logger.error("Scanning error", exc_info=True)
            self._report_error(f"Scanning error: {e}")
        finally:
            if self._capture is not None:
                self._capture.release()
                self._capture = None
            self._running = False

    @staticmethod
    def parse_payment_qr(
        data: str, default_type: WalletType | None = None
    ) -> ScannedQRData:
        """Parse a plain address or a `<coin>:<address>?amount=...` URI.

        The URI scheme decides the wallet type; plain addresses keep
        `default_type`.
        """
        if not data or not data.strip():
            return ScannedQRData(error="Empty QR data")

        text = data.strip()
        wallet_type = default_type
        query = ""

        if ":" in text:
            scheme, _, rest = text.partition(":")
            wallet_type = WalletType.from_scheme(scheme)
            if wallet_type is None:
                return ScannedQRData(
                    raw_data=data, error=f"Unsupported payment scheme: {scheme}"
                )
            text, _, query = rest.lstrip("/").partition("?")

        if not ADDRESS_RE.match(text):
            return ScannedQRData(raw_data=data, error="Not a wallet address")

        params = parse_qs(query)
        amount = None
        if "amount" in params:
            try:
                amount = Decimal(params["amount"][0])
            except InvalidOperation:
                logger.debug("Ignoring invalid amount in %s", data)

        label = params.get("label", [None])[0]
        return ScannedQRData(
            address=text,
            wallet_type=wallet_type,
            amount=amount,
            label=label,
            raw_data=data,
        )
