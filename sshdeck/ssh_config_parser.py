"""Parse the managed subset of an OpenSSH client config into HostEntry objects.

Only ``Host``, ``HostName``, ``User``, ``Port``, ``IdentityFile`` and
``ProxyJump`` are read. Everything else is skipped by the parser; the raw
text is left alone by :mod:`sshdeck.host_block` when the file is rewritten.

Tags live in a special comment placed before a ``Host`` line::

    # Tags: prod, web
    Host web1
        HostName 10.0.0.1
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .host_entry import DEFAULT_PORT, HostEntry

logger = logging.getLogger(__name__)

TAGS_PREFIX = "# Tags:"

# Bytes that are not valid UTF-8 (e.g. Latin-1 comments) round-trip unchanged.
CONFIG_ENCODING = "utf-8"
CONFIG_ERRORS = "surrogateescape"

# Pending tags survive blank lines and unrelated comments until the next Host.
TAG_POLICY_PENDING = "pending"
# Tags only attach when the tags line is the last non-blank line before Host.
TAG_POLICY_ADJACENT = "adjacent"
TAG_POLICIES = (TAG_POLICY_PENDING, TAG_POLICY_ADJACENT)

_FIELD_FOR_KEY = {
    "hostname": "hostname",
    "user": "user",
    "port": "port",
    "identityfile": "identity_file",
    "proxyjump": "proxy_jump",
}


def is_tags_line(line: str) -> bool:
    return line.strip().startswith(TAGS_PREFIX)


def parse_tags_comment(line: str) -> List[str]:
    """Return the labels of a ``# Tags: a, b`` comment (empty labels dropped)."""
    text = line.strip()
    if not text.startswith(TAGS_PREFIX):
        return []
    body = text[len(TAGS_PREFIX):].strip()
    return [tag.strip() for tag in body.split(",") if tag.strip()]


def format_tags_comment(tags: Iterable[str]) -> str:
    return f"{TAGS_PREFIX} {', '.join(tags)}"


def parse_config_lines(lines: Iterable[str], *, tag_policy: str = TAG_POLICY_PENDING) -> List[HostEntry]:
    """Build the ordered host list from an iterable of raw lines."""
    if tag_policy not in TAG_POLICIES:
        raise ValueError(f"Unknown tag policy: {tag_policy!r}")

    hosts: List[HostEntry] = []
    current: Optional[HostEntry] = None
    pending_tags: List[str] = []

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith(TAGS_PREFIX):
            pending_tags.extend(parse_tags_comment(line))
            continue

        if tag_policy == TAG_POLICY_ADJACENT and pending_tags:
            parts = line.split()
            if parts[0].lower() != "host" or len(parts) < 2:
                logger.debug("Dropping tags %s not adjacent to a Host line", pending_tags)
                pending_tags = []

        if line.startswith("#"):
            continue

        parts = line.split()
        if len(parts) < 2:
            continue

        key = parts[0].lower()
        value = " ".join(parts[1:])

        if key == "host":
            if current is not None:
                hosts.append(current)
            current = HostEntry(name=value, port=DEFAULT_PORT, tags=list(pending_tags))
            pending_tags = []
            continue

        attr = _FIELD_FOR_KEY.get(key)
        if attr is None or current is None:
            continue
        setattr(current, attr, value)

    if current is not None:
        hosts.append(current)

    return hosts


def parse_config(content: str, *, tag_policy: str = TAG_POLICY_PENDING) -> List[HostEntry]:
    """Parse config text and return hosts in declaration order."""
    return parse_config_lines(content.splitlines(), tag_policy=tag_policy)


def parse_config_file(path: str, *, tag_policy: str = TAG_POLICY_PENDING) -> List[HostEntry]:
    """Parse the config file at *path*. Raises ``OSError`` if it cannot be read."""
    with open(path, "r", encoding=CONFIG_ENCODING, errors=CONFIG_ERRORS) as f:
        hosts = parse_config_lines(f, tag_policy=tag_policy)
    logger.debug("Parsed %d host(s) from %s", len(hosts), path)
    return hosts


__all__ = [
    "TAGS_PREFIX",
    "CONFIG_ENCODING",
    "CONFIG_ERRORS",
    "TAG_POLICY_PENDING",
    "TAG_POLICY_ADJACENT",
    "TAG_POLICIES",
    "is_tags_line",
    "parse_tags_comment",
    "format_tags_comment",
    "parse_config_lines",
    "parse_config",
    "parse_config_file",
]
