"""Colored lifecycle logger — ANSI-colored console logging for store requests.

Provides a LifecycleLogger with color-coded output per request phase,
making it easy to trace dispatches and completions in the terminal.

Color scheme:
    🟡 Yellow  — Pending (dispatched)
    🟢 Green   — Fulfilled
    🔴 Red     — Rejected
    ⚪ Gray    — Stale completions / timing
"""

import logging
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    GRAY = "\033[90m"


# ── Phase Definitions ────────────────────────────────────────────────

class LifecycleStage:
    """Predefined lifecycle stages with colors and icons."""

    PENDING = ("PENDING", _Colors.YELLOW, "⏳")
    FULFILLED = ("FULFILLED", _Colors.GREEN, "✅")
    REJECTED = ("REJECTED", _Colors.RED, "❌")
    STALE = ("STALE", _Colors.GRAY, "↩️")


# ── LifecycleLogger ──────────────────────────────────────────────────

class LifecycleLogger:
    """Color-coded logger for request lifecycle transitions.

    Usage:
        log = LifecycleLogger(__name__)
        log.stage(LifecycleStage.PENDING, "customers/fetchAll", token=3)
        log.stage(LifecycleStage.FULFILLED, "customers/fetchAll", token=3, elapsed="0.12s")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def stage(self, stage: tuple[str, str, str], operation: str, **kwargs: Any) -> None:
        """Log a lifecycle transition; rejections go out at WARNING."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{operation}{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        if stage is LifecycleStage.REJECTED:
            self._logger.warning(formatted)
        elif stage is LifecycleStage.STALE:
            self._logger.debug(formatted)
        else:
            self._logger.info(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed) at DEBUG."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.DIM}({details}){_Colors.RESET}"
        self._logger.debug(formatted)
