"""Platform-related utility functions."""

import logging
import os
from pathlib import Path

APP_NAME = "sshdeck"

logger = logging.getLogger(__name__)


def _normalize_path(path: str) -> str:
    """Expand user references and return an absolute path."""
    return os.path.abspath(os.path.expanduser(path))


def get_home_dir() -> str:
    expanded = os.path.expanduser("~")
    if expanded and expanded != "~":
        return expanded
    try:
        return str(Path.home())
    except RuntimeError:
        logger.warning(
            "Unable to determine the user's home directory; "
            "falling back to the current working directory."
        )
        return os.getcwd()


def get_config_dir() -> str:
    """Return the per-user configuration directory for sshdeck.

    ``SSHDECK_CONFIG_DIR`` overrides the location; otherwise
    ``$XDG_CONFIG_HOME/sshdeck`` (``~/.config/sshdeck``) is used.
    """
    override = os.environ.get("SSHDECK_CONFIG_DIR")
    if override:
        return _normalize_path(override)
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(get_home_dir(), ".config")
    return _normalize_path(os.path.join(base, APP_NAME))


def get_ssh_dir() -> str:
    """Return the user's SSH directory.

    The location can be overridden by setting the ``SSHDECK_SSH_DIR``
    environment variable.
    """
    override = os.environ.get("SSHDECK_SSH_DIR")
    if override:
        return _normalize_path(override)
    return _normalize_path(os.path.join(get_home_dir(), ".ssh"))


def get_default_ssh_config_path() -> str:
    return os.path.join(get_ssh_dir(), "config")
