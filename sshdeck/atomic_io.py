"""Crash-safe file replacement helpers."""

import logging
import os
import tempfile

logger = logging.getLogger(__name__)


def ensure_secure_permissions(path: str, mode: int):
    try:
        os.chmod(path, mode)
    except OSError as e:
        logger.warning(f"Could not set permissions {oct(mode)} on {path}: {e}")


def ensure_parent_dir(path: str, mode: int = 0o700) -> str:
    """Create the parent directory of *path* if needed and return *path*."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.isdir(parent):
        os.makedirs(parent, mode=mode, exist_ok=True)
        logger.info("Created directory %s", parent)
    return path


def atomic_write_text(path: str, content: str, mode: int = 0o600, *, encoding: str = "utf-8", errors: str = "strict"):
    """Write *content* to a temp file beside *path* and rename it into place.

    Readers see either the old or the new file, never a partial write. When
    *path* is a symlink the file it points to is replaced and the link kept.
    """
    target = os.path.realpath(path)
    directory = os.path.dirname(target)
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".sshdeck-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding, errors=errors, newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except (OSError, ValueError):
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


__all__ = ["atomic_write_text", "ensure_parent_dir", "ensure_secure_permissions"]
