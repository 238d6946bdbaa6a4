"""
SSH config store for sshdeck
Reads and edits Host entries in an OpenSSH client config file
"""

import logging
import os
import threading
from typing import List, Optional

from .atomic_io import atomic_write_text, ensure_parent_dir, ensure_secure_permissions
from .backup import backup_config
from .errors import HostExistsError, HostNotFoundError
from .host_block import (
    join_lines,
    locate_host_block,
    remove_host_block,
    render_append_text,
    replace_host_block,
    split_lines,
)
from .host_entry import HostEntry
from .platform_utils import get_default_ssh_config_path
from .search_utils import collect_tags
from .ssh_config_parser import (
    CONFIG_ENCODING,
    CONFIG_ERRORS,
    TAG_POLICIES,
    TAG_POLICY_PENDING,
    parse_config,
    parse_config_file,
)

logger = logging.getLogger(__name__)


class SSHConfigStore:
    """Structured access to the Host entries of one SSH config file.

    The file is the only source of truth: every read parses it again. Write
    operations are serialised by a lock owned by this instance.
    """

    def __init__(self, config_path: Optional[str] = None, *, tag_policy: Optional[str] = None):
        self.config_path = os.path.abspath(os.path.expanduser(config_path or get_default_ssh_config_path()))
        if tag_policy and tag_policy not in TAG_POLICIES:
            logger.warning(f"Unknown tag policy {tag_policy!r}; using '{TAG_POLICY_PENDING}'")
            tag_policy = None
        self.tag_policy = tag_policy or TAG_POLICY_PENDING
        self._write_lock = threading.Lock()

    def _resolve(self, config_path: Optional[str]) -> str:
        if config_path:
            return os.path.abspath(os.path.expanduser(config_path))
        return self.config_path

    # ------------------------------------------------------------------ reads
    def list_hosts(self, config_path: Optional[str] = None) -> List[HostEntry]:
        """Return every managed host in declaration order."""
        path = self._resolve(config_path)
        if not os.path.exists(path):
            logger.debug("SSH config %s does not exist; no hosts", path)
            return []
        return parse_config_file(path, tag_policy=self.tag_policy)

    def get_host(self, name: str, config_path: Optional[str] = None) -> HostEntry:
        path = self._resolve(config_path)
        for host in self.list_hosts(path):
            if host.name == name:
                return host
        raise HostNotFoundError(name, path)

    def host_exists(self, name: str, config_path: Optional[str] = None) -> bool:
        return any(host.name == name for host in self.list_hosts(config_path))

    def list_tags(self, config_path: Optional[str] = None) -> List[str]:
        return collect_tags(self.list_hosts(config_path))

    # ----------------------------------------------------------------- writes
    def add_host(self, entry: HostEntry):
        """Append *entry* as a new block at the end of the file."""
        path = self.config_path
        with self._write_lock:
            exists = os.path.exists(path)
            if exists:
                backup_config(path)
                with open(path, "r", encoding=CONFIG_ENCODING, errors=CONFIG_ERRORS, newline="") as f:
                    content = f.read()
            else:
                content = ""

            names = {host.name for host in parse_config(content, tag_policy=self.tag_policy)}
            if entry.name in names:
                logger.error(f"Refusing to add host '{entry.name}': name already used in {path}")
                raise HostExistsError(entry.name, path)

            try:
                ensure_parent_dir(path)
                with open(path, "a", encoding=CONFIG_ENCODING, errors=CONFIG_ERRORS, newline="") as f:
                    f.write(render_append_text(content, entry))
            except OSError as e:
                logger.error(f"Failed to write SSH config {path}: {e}")
                raise
            if not exists:
                ensure_secure_permissions(path, 0o600)

        logger.info("Added host %s to %s", entry.name, path)

    def update_host(self, old_name: str, entry: HostEntry):
        """Replace the block of *old_name* with *entry* (which may rename it)."""
        path = self.config_path
        with self._write_lock:
            if not os.path.exists(path):
                raise HostNotFoundError(old_name, path)

            backup_config(path)
            lines = self._read_lines(path)

            span = locate_host_block(lines, old_name)
            if span is None:
                raise HostNotFoundError(old_name, path)

            if entry.name != old_name:
                names = {host.name for host in parse_config(join_lines(lines), tag_policy=self.tag_policy)}
                if entry.name in names:
                    logger.error(f"Cannot rename '{old_name}' to '{entry.name}': name already used")
                    raise HostExistsError(entry.name, path)

            self._write_lines(path, replace_host_block(lines, span, entry))

        if entry.name != old_name:
            logger.info("Updated host %s (renamed to %s) in %s", old_name, entry.name, path)
        else:
            logger.info("Updated host %s in %s", old_name, path)

    def delete_host(self, name: str):
        """Remove the block of *name*, including its tags comment."""
        path = self.config_path
        with self._write_lock:
            if not os.path.exists(path):
                raise HostNotFoundError(name, path)

            backup_config(path)
            lines = self._read_lines(path)

            span = locate_host_block(lines, name)
            if span is None:
                raise HostNotFoundError(name, path)

            self._write_lines(path, remove_host_block(lines, span))

        logger.info("Deleted host %s from %s", name, path)

    # ---------------------------------------------------------------- helpers
    @staticmethod
    def _read_lines(path: str) -> List[str]:
        with open(path, "r", encoding=CONFIG_ENCODING, errors=CONFIG_ERRORS, newline="") as f:
            return split_lines(f.read())

    @staticmethod
    def _write_lines(path: str, lines: List[str]):
        try:
            atomic_write_text(path, join_lines(lines), encoding=CONFIG_ENCODING, errors=CONFIG_ERRORS)
        except OSError as e:
            logger.error(f"Failed to write SSH config {path}: {e}")
            raise


__all__ = ["SSHConfigStore"]
