"""Single-generation backup of the SSH config before it is rewritten."""

import logging
import shutil

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"


def backup_path_for(config_path: str) -> str:
    return f"{config_path}{BACKUP_SUFFIX}"


def backup_config(config_path: str) -> str:
    """Copy *config_path* next to itself with a ``.backup`` suffix.

    Any previous backup is overwritten. Raises ``OSError`` when the source
    cannot be read or the backup cannot be written.
    """
    backup_path = backup_path_for(config_path)
    try:
        shutil.copyfile(config_path, backup_path)
    except OSError as e:
        logger.error(f"Failed to back up {config_path} to {backup_path}: {e}")
        raise
    logger.debug("Backed up %s to %s", config_path, backup_path)
    return backup_path


__all__ = ["BACKUP_SUFFIX", "backup_path_for", "backup_config"]
