"""Line-level surgery on SSH config text.

Everything here is pure: callers split the file into lines with
:func:`split_lines`, locate a ``[start, end)`` span, splice, and join the
result back with :func:`join_lines`. File I/O lives in
:mod:`sshdeck.config_store`.

The line model keeps a trailing empty element when the text ends with a
newline, so ``join_lines(split_lines(text))`` returns *text* with line
endings normalised to ``\\n``.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional

from .host_entry import HostEntry
from .ssh_config_parser import format_tags_comment, is_tags_line

logger = logging.getLogger(__name__)

INDENT = "    "

# Keywords that open a new top-level block in ssh_config.
_BLOCK_KEYWORDS = ("host", "match")


class HostSpan(NamedTuple):
    """Half-open range of line indexes occupied by one host block."""

    start: int
    end: int
    has_tag_prefix: bool


def split_lines(content: str) -> List[str]:
    lines = content.splitlines()
    if content.endswith(("\n", "\r")):
        lines.append("")
    return lines


def join_lines(lines: List[str]) -> str:
    return "\n".join(lines)


def _keyword(line: str) -> str:
    parts = line.split(None, 1)
    return parts[0].lower() if parts else ""


def _is_block_start(line: str) -> bool:
    return _keyword(line) in _BLOCK_KEYWORDS


def host_line_name(line: str) -> Optional[str]:
    """Return the first name of a ``Host`` line, or ``None`` for other lines."""
    parts = line.split()
    if len(parts) < 2 or parts[0].lower() != "host":
        return None
    return parts[1]


def _ends_block(lines: List[str], index: int) -> bool:
    line = lines[index]
    if not line.strip() or _is_block_start(line):
        return True
    # A tags comment directly above the next Host belongs to that host.
    if is_tags_line(line) and index + 1 < len(lines):
        return host_line_name(lines[index + 1]) is not None
    return False


def locate_host_block(lines: List[str], name: str) -> Optional[HostSpan]:
    """Find the span of the ``Host <name>`` block, including its tags line."""
    for index, line in enumerate(lines):
        if host_line_name(line) != name:
            continue

        has_tags = index > 0 and is_tags_line(lines[index - 1])
        start = index - 1 if has_tags else index

        end = index + 1
        while end < len(lines) and not _ends_block(lines, end):
            end += 1

        logger.debug("Located host %s at lines [%d, %d) tags=%s", name, start, end, has_tags)
        return HostSpan(start, end, has_tags)
    return None


def render_host_block(entry: HostEntry) -> List[str]:
    """Serialise *entry* as config lines, without a leading separator."""
    block: List[str] = []
    if entry.tags:
        block.append(format_tags_comment(entry.tags))
    block.append(f"Host {entry.name}")
    block.append(f"{INDENT}HostName {entry.hostname}")
    if entry.user:
        block.append(f"{INDENT}User {entry.user}")
    if entry.has_custom_port:
        block.append(f"{INDENT}Port {entry.port}")
    if entry.identity_file:
        block.append(f"{INDENT}IdentityFile {entry.identity_file}")
    if entry.proxy_jump:
        block.append(f"{INDENT}ProxyJump {entry.proxy_jump}")
    return block


def render_append_text(content: str, entry: HostEntry) -> str:
    """Return the text to append to *content* so that it gains *entry*.

    A blank separator line precedes the new block unless the file is empty.
    """
    if not content:
        prefix = ""
    elif content.endswith(("\n", "\r")):
        prefix = "\n"
    else:
        prefix = "\n\n"
    return prefix + join_lines(render_host_block(entry)) + "\n"


def replace_host_block(lines: List[str], span: HostSpan, entry: HostEntry) -> List[str]:
    """Swap the lines in *span* for a freshly rendered block."""
    head = list(lines[:span.start])
    tail = list(lines[span.end:])
    # At most one blank line between blocks and none at the top of the file.
    separator = [""] if head and head[-1].strip() else []
    return head + separator + render_host_block(entry) + tail


def remove_host_block(lines: List[str], span: HostSpan) -> List[str]:
    """Drop *span* and at most one blank line right after it."""
    end = span.end
    if end < len(lines) and not lines[end].strip():
        end += 1
    result = list(lines[:span.start]) + list(lines[end:])
    # The final "" stands for the file's trailing newline.
    if lines[-1:] == [""] and result and result[-1] != "":
        result.append("")
    return result


__all__ = [
    "HostSpan",
    "split_lines",
    "join_lines",
    "host_line_name",
    "locate_host_block",
    "render_host_block",
    "render_append_text",
    "replace_host_block",
    "remove_host_block",
]
