"""
Helpers for preparing SSH commands for the TUI.

Hosts managed by sshdeck live in an SSH config file, so connecting only
needs the host alias. When the store points at a file other than
``~/.ssh/config`` it is passed explicitly with ``-F``.
"""

from __future__ import annotations

import os
from typing import List, Optional

from sshdeck.platform_utils import get_default_ssh_config_path


def build_ssh_command(entry, config_path: Optional[str] = None) -> List[str]:
    """
    Return the argv list for launching SSH for *entry*.

    Args:
        entry: :class:`sshdeck.host_entry.HostEntry` to connect to.
        config_path: SSH config the entry was read from.
    """

    name = (getattr(entry, "name", "") or "").strip()
    if not name:
        raise ValueError("Host entry is missing a name")

    cmd: List[str] = ["ssh"]

    if config_path:
        abs_path = os.path.abspath(os.path.expanduser(config_path))
        if abs_path != os.path.abspath(get_default_ssh_config_path()):
            cmd.extend(["-F", abs_path])

    cmd.append(name)
    return cmd


__all__ = ["build_ssh_command"]
