"""Data model for a single managed ``Host`` block."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

DEFAULT_PORT = "22"


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """Strip tags and drop empty or repeated labels, keeping first-seen order."""
    seen = set()
    result: List[str] = []
    for tag in tags or []:
        label = str(tag).strip()
        if not label or label in seen:
            continue
        seen.add(label)
        result.append(label)
    return result


@dataclass
class HostEntry:
    """One connection target as it appears in the SSH config."""

    name: str
    hostname: str = ""
    user: str = ""
    port: str = DEFAULT_PORT
    identity_file: str = ""
    proxy_jump: str = ""
    tags: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.name = (self.name or "").strip()
        self.port = str(self.port).strip() if self.port is not None else ""
        self.tags = normalize_tags(self.tags)

    @property
    def has_custom_port(self) -> bool:
        return bool(self.port) and self.port != DEFAULT_PORT

    @property
    def effective_port(self) -> str:
        return self.port or DEFAULT_PORT

    def __str__(self):
        target = self.hostname or self.name
        if self.user:
            target = f"{self.user}@{target}"
        return f"{self.name} ({target})"


__all__ = ["DEFAULT_PORT", "HostEntry", "normalize_tags"]
