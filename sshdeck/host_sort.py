"""Helpers for ordering the host list shown to the user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from gettext import gettext as _


@dataclass(frozen=True)
class SortPreset:
    """Describes a host sorting preset."""

    preset_id: str
    title: str
    description: str
    reverse: bool = False
    keep_file_order: bool = False


def _name_key(entry) -> Tuple[str, str]:
    name = str(getattr(entry, "name", "") or "")
    hostname = str(getattr(entry, "hostname", "") or "")
    return (name.casefold(), hostname.casefold())


DEFAULT_HOST_SORT = "file"

HOST_SORT_PRESETS: Dict[str, SortPreset] = {
    "file": SortPreset(
        preset_id="file",
        title=_("File order"),
        description=_("Keep hosts in the order they appear in the SSH config"),
        keep_file_order=True,
    ),
    "name-asc": SortPreset(
        preset_id="name-asc",
        title=_("Name (A-Z)"),
        description=_("Sort hosts alphabetically by name"),
    ),
    "name-desc": SortPreset(
        preset_id="name-desc",
        title=_("Name (Z-A)"),
        description=_("Sort hosts alphabetically by name in reverse"),
        reverse=True,
    ),
}


def sort_hosts(entries: Iterable, preset_id: str) -> List:
    """Return a new list of *entries* ordered by *preset_id*.

    Unknown presets fall back to file order.
    """
    items = list(entries)
    preset = HOST_SORT_PRESETS.get(preset_id)
    if not preset or preset.keep_file_order:
        return items
    return sorted(items, key=_name_key, reverse=preset.reverse)


__all__ = ["SortPreset", "DEFAULT_HOST_SORT", "HOST_SORT_PRESETS", "sort_hosts"]
