"""Colored pipeline logger — ANSI-colored console tracing of the prompt pipeline.

Color scheme:
    🔵 Blue    — Prompt classification
    🟣 Magenta — Query planning
    🟡 Yellow  — Repository search / category filter
    🟠 Cyan    — Deduplication / ranking
    🟢 Green   — Detail lookup / recommendations / completion
    🔴 Red     — Errors
    ⚪ Gray    — Details / stats
"""

import logging
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


class PipelineStage:
    """Predefined pipeline stages with colors and icons."""

    CLASSIFY = ("CLASSIFY", _Colors.BLUE, "🏷️")
    PLAN = ("PLAN", _Colors.MAGENTA, "🤖")
    SEARCH = ("SEARCH", _Colors.YELLOW, "🔍")
    FILTER = ("FILTER", _Colors.YELLOW, "📂")
    DEDUP = ("DEDUP", _Colors.CYAN, "🧹")
    RANK = ("RANK", _Colors.CYAN, "📊")
    DETAIL = ("DETAIL", _Colors.GREEN, "📋")
    RECOMMEND = ("RECOMMEND", _Colors.GREEN, "💡")
    PIPELINE = ("PIPELINE", _Colors.WHITE, "⚙️")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")


class PipelineLogger:
    """Color-coded logger for the prompt pipeline.

    Usage:
        log = PipelineLogger("PromptService")
        log.step_start(PipelineStage.SEARCH, "Searching 2 keywords")
        log.detail("keyword=서울 hits=14")
        log.step_complete(PipelineStage.SEARCH, "31 candidates")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._format_details(kwargs))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._format_details(kwargs))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a pipeline step error in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed)."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.info(formatted + self._format_details(kwargs))

    def separator(self, title: str = "") -> None:
        if title:
            self._logger.info(
                f"{_Colors.GRAY}{'─' * 10} {title} {'─' * max(50 - len(title), 0)}{_Colors.RESET}"
            )
        else:
            self._logger.info(f"{_Colors.GRAY}{'─' * 60}{_Colors.RESET}")

    @staticmethod
    def _format_details(details: dict[str, Any]) -> str:
        if not details:
            return ""
        joined = " | ".join(f"{k}={v}" for k, v in details.items())
        return f" {_Colors.GRAY}({joined}){_Colors.RESET}"
