from __future__ import annotations

from typing import Mapping


def format_stats(stats: Mapping[str, int]) -> str:
    mapping = {
        "spelling": "spelling fixes",
        "capitalization": "capitalized letters",
    }
    parts = [f"{label}: {stats[key]}" for key, label in mapping.items() if stats.get(key)]
    if not parts:
        return "Nothing to fix, the text already looks clean."
    return "Corrected " + ", ".join(parts) + "."
