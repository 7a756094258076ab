"""Clipboard access for Wallet Explorer.

pyperclip is tried first; inside terminals without a system clipboard the
address is pushed to the terminal emulator with an OSC 52 escape sequence.
"""

from __future__ import annotations

import base64
import logging
import os
import sys
from typing import Any, TextIO

import pyperclip

logger = logging.getLogger(__name__)


def _terminal_streams(stream: TextIO | None) -> list[TextIO]:
    candidates: list[TextIO] = []
    if stream is not None:
        candidates.append(stream)
    # `sys.__stdout__` is the real terminal even while Textual owns `sys.stdout`.
    if sys.__stdout__ is not None:
        candidates.append(sys.__stdout__)
    candidates.append(sys.stdout)
    return candidates


def copy_with_osc52(text: str, stream: TextIO | None = None) -> bool:
    if not text:
        return False

    payload = base64.b64encode(text.encode("utf-8")).decode("ascii")
    sequence = f"\x1b]52;c;{payload}\x07"
    if os.getenv("TMUX"):
        sequence = f"\x1bPtmux;\x1b{sequence}\x1b\\"

    for output in _terminal_streams(stream):
        try:
            output.write(sequence)
            output.flush()
            return True
        except (OSError, ValueError) as e:
            logger.debug("OSC 52 write failed on %r: %s", output, e)
    return False


def copy_with_pyperclip(text: str) -> bool:
    if not text:
        return False

    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.debug("pyperclip copy failed: %s", e)
        return False

    try:
        return pyperclip.paste() == text
    except pyperclip.PyperclipException:
        # Some environments allow copy but not paste.
        return True


def copy_text(text: str, prefer_osc52: bool = False) -> dict[str, Any]:
    if prefer_osc52:
        methods = (("osc52", copy_with_osc52), ("pyperclip", copy_with_pyperclip))
    else:
        methods = (("pyperclip", copy_with_pyperclip), ("osc52", copy_with_osc52))

    for method_name, method in methods:
        if method(text):
            return {"success": True, "method": method_name}

    return {"success": False, "method": None}


class ClipboardWriter:
    """Callable clipboard writer used by the coordinator."""

    def __init__(self, prefer_osc52: bool | None = None):
        if prefer_osc52 is None:
            prefer_osc52 = os.getenv("WALLET_EXPLORER_PREFER_OSC52", "").lower() in (
                "1",
                "true",
                "yes",
            )
        self.prefer_osc52 = prefer_osc52

    def __call__(self, text: str) -> bool:
        result = copy_text(text, prefer_osc52=self.prefer_osc52)
        if result["success"]:
            logger.info("Copied %d characters using %s", len(text), result["method"])
        else:
            logger.warning("Clipboard unavailable, nothing copied")
        return bool(result["success"])
