"""Configuration for rendering maps as text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["RenderConfig"]


@dataclass(frozen=True)
class RenderConfig:
    """Controls how a map renders its entries as a bracketed list.

    The default renders ``[1: 'a', 3: 'c']``.
    """

    open: str = "["  # Opening bracket
    close: str = "]"  # Closing bracket
    entry_sep: str = ", "  # Between entries
    pair_sep: str = ": "  # Between a key and its value
    use_repr: bool = True  # Format keys and values with repr rather than str

    @staticmethod
    def default() -> RenderConfig:
        """Get the shared default configuration."""
        return _DEFAULT

    def format_value(self, value: Any) -> str:
        return repr(value) if self.use_repr else str(value)

    def format_pair(self, key: Any, value: Any) -> str:
        return f"{self.format_value(key)}{self.pair_sep}{self.format_value(value)}"


_DEFAULT = RenderConfig()
