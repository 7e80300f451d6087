from __future__ import annotations

import unicodedata

UNKNOWN_FILE = "Unknown File"


def derive_display_name(name: str | None, position: int) -> str:
    normalized = unicodedata.normalize("NFC", name or "").strip()
    return normalized or f"File {position}"


def truncate_display_name(name: str | None, max_length: int = 25) -> str:
    if not name:
        return UNKNOWN_FILE
    if len(name) <= max_length:
        return name
    return name[: max_length - 3] + "..."
