from __future__ import annotations

from datetime import datetime
from typing import Optional

from .models import SmartValue


def fmt_bytes(value: Optional[int]) -> str:
    if not value:
        return "0 B"
    size = float(value)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(size) < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} PB"


def fmt_size(formatted: Optional[str], raw: Optional[int]) -> str:
    """Producer-formatted size when present, otherwise our own rendering."""
    return formatted if formatted else fmt_bytes(raw)


def fmt_percent(value: float) -> str:
    return f"{value:.1f}%"


def fmt_value(value: SmartValue) -> str:
    if value is None or value == "":
        return "N/A"
    return f"{value}"


def fmt_text(value: Optional[str], default: str = "Unknown") -> str:
    return value if value else default


def fmt_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "Unknown"
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M:%S")


def usage_bar(percent: float, width: int = 20) -> str:
    """Text bar for an already clamped percentage."""
    filled = int(round(percent / 100 * width))
    return "#" * filled + "-" * (width - filled)
