"""
Field validation for host entries
Front ends run these checks before handing entries to the config store
"""

import ipaddress
import logging
import os
import re
from gettext import gettext as _
from typing import Iterable, List, Optional

from .errors import ValidationError
from .host_entry import HostEntry

logger = logging.getLogger(__name__)

_HOSTNAME_RE = re.compile(r'^[a-zA-Z0-9]([a-zA-Z0-9\-\.]*[a-zA-Z0-9])?$')
_LABEL_RE = re.compile(r'^[A-Za-z0-9_.@%+\-]+$')
_PATTERN_CHARS = set('*?!')


class ValidationResult:
    def __init__(self, is_valid: bool = True, message: str = "", severity: str = "info", field: str = ""):
        self.is_valid = is_valid
        self.message = message
        self.severity = severity  # "error", "warning", "info"
        self.field = field

    def __repr__(self):
        return f"ValidationResult({self.field!r}, {self.is_valid}, {self.message!r})"


class HostEntryValidator:
    def __init__(self, existing_names: Optional[Iterable[str]] = None):
        self.common_ssh_ports = {22, 2222, 222, 2022}
        self.existing_names: set[str] = set()
        if existing_names:
            self.set_existing_names(existing_names)

    def set_existing_names(self, names: Iterable[str]):
        self.existing_names = {str(n).strip() for n in (names or [])}

    def validate_name(self, name: str, current_name: Optional[str] = None) -> ValidationResult:
        if not name or not name.strip():
            return ValidationResult(False, _("Host name is required"), "error", "name")
        name = name.strip()
        if any(c.isspace() for c in name):
            return ValidationResult(False, _("Host name cannot contain whitespace"), "error", "name")
        if _PATTERN_CHARS & set(name):
            return ValidationResult(False, _("Wildcard patterns cannot be managed as hosts"), "error", "name")
        if name != current_name and name in self.existing_names:
            return ValidationResult(False, _("Host name already exists"), "error", "name")
        return ValidationResult(True, _("Valid host name"), field="name")

    def _validate_ip_address(self, ip_str: str) -> ValidationResult:
        try:
            ip = ipaddress.ip_address(ip_str)
        except ValueError:
            return ValidationResult(False, _("Invalid IP address format"), "error", "hostname")
        if ip.is_multicast:
            return ValidationResult(False, _("Multicast addresses not supported"), "error", "hostname")
        if ip.is_loopback:
            return ValidationResult(True, _("Loopback address (localhost)"), "info", "hostname")
        if ip.is_private:
            return ValidationResult(True, _("Private network address"), "info", "hostname")
        return ValidationResult(True, _("Valid IPv{ver} address").format(ver=ip.version), field="hostname")

    def _validate_hostname(self, hostname: str) -> ValidationResult:
        if len(hostname) > 253:
            return ValidationResult(False, _("Hostname too long (max 253 characters)"), "error", "hostname")
        if hostname.startswith('.') or hostname.endswith('.'):
            return ValidationResult(False, _("Hostname cannot start or end with dot"), "error", "hostname")
        if '..' in hostname:
            return ValidationResult(False, _("Hostname cannot contain consecutive dots"), "error", "hostname")
        if not _HOSTNAME_RE.match(hostname):
            return ValidationResult(False, _("Invalid hostname format"), "error", "hostname")
        for label in hostname.split('.'):
            if len(label) > 63:
                return ValidationResult(False, _("Hostname segment too long (max 63 chars)"), "error", "hostname")
            if label.startswith('-') or label.endswith('-'):
                return ValidationResult(
                    False, _("Hostname segment cannot start/end with hyphen"), "error", "hostname"
                )
        if '.' not in hostname and hostname.lower() != 'localhost':
            return ValidationResult(True, _("Consider using fully qualified domain name"), "warning", "hostname")
        return ValidationResult(True, _("Valid hostname"), field="hostname")

    def validate_hostname(self, hostname: str) -> ValidationResult:
        if not hostname or not hostname.strip():
            return ValidationResult(False, _("Hostname is required"), "error", "hostname")
        hostname = hostname.strip()
        # Bracketed IPv6 literals are accepted as written in ssh_config
        if hostname.startswith('[') and hostname.endswith(']'):
            hostname = hostname[1:-1]
        if ':' in hostname or re.fullmatch(r"[0-9.]+", hostname):
            return self._validate_ip_address(hostname)
        return self._validate_hostname(hostname)

    def validate_port(self, port: str) -> ValidationResult:
        if port is None or not str(port).strip():
            return ValidationResult(True, _("Default SSH port"), "info", "port")
        try:
            port_num = int(str(port).strip())
        except ValueError:
            return ValidationResult(False, _("Port must be a number"), "error", "port")
        if not (1 <= port_num <= 65535):
            return ValidationResult(False, _("Port must be between 1-65535"), "error", "port")
        if port_num in self.common_ssh_ports:
            return ValidationResult(True, _("Standard SSH port"), "info", "port")
        if port_num < 1024:
            return ValidationResult(True, _("System port - unusual for SSH"), "warning", "port")
        return ValidationResult(True, _("Valid port number"), field="port")

    def validate_user(self, user: str) -> ValidationResult:
        if not user:
            return ValidationResult(True, _("Login user taken from ssh defaults"), "info", "user")
        if any(c.isspace() for c in user):
            return ValidationResult(False, _("User cannot contain whitespace"), "error", "user")
        return ValidationResult(True, _("Valid user"), field="user")

    def validate_identity_file(self, path: str) -> ValidationResult:
        if not path:
            return ValidationResult(True, "", field="identity_file")
        expanded = os.path.expanduser(path)
        if not os.path.exists(expanded):
            return ValidationResult(True, _("Identity file does not exist yet"), "warning", "identity_file")
        if os.path.isdir(expanded):
            return ValidationResult(False, _("Identity file is a directory"), "error", "identity_file")
        return ValidationResult(True, _("Identity file found"), field="identity_file")

    def validate_proxy_jump(self, value: str) -> ValidationResult:
        if not value:
            return ValidationResult(True, "", field="proxy_jump")
        if value.strip().lower() == 'none':
            return ValidationResult(True, _("Proxy jump disabled"), "info", "proxy_jump")
        for hop in value.split(','):
            hop = hop.strip()
            if not hop or any(c.isspace() for c in hop):
                return ValidationResult(False, _("Invalid jump host '{hop}'").format(hop=hop), "error", "proxy_jump")
            target = hop.rsplit('@', 1)[-1]
            if target.startswith('['):
                host, _sep, rest = target[1:].partition(']')
                port = rest[1:] if rest.startswith(':') else ''
            elif target.count(':') == 1:
                host, port = target.split(':')
            else:
                host, port = target, ''
            if not host:
                return ValidationResult(False, _("Jump host is missing a host"), "error", "proxy_jump")
            if port:
                port_result = self.validate_port(port)
                if not port_result.is_valid:
                    return ValidationResult(False, port_result.message, "error", "proxy_jump")
        return ValidationResult(True, _("Valid proxy jump"), field="proxy_jump")

    def validate_tags(self, tags: Iterable[str]) -> ValidationResult:
        for tag in tags or []:
            if not _LABEL_RE.match(str(tag)):
                return ValidationResult(
                    False, _("Invalid tag '{tag}': use letters, digits and -_.@%+").format(tag=tag), "error", "tags"
                )
        return ValidationResult(True, "", field="tags")

    def validate(self, entry: HostEntry, current_name: Optional[str] = None) -> List[ValidationResult]:
        return [
            self.validate_name(entry.name, current_name),
            self.validate_hostname(entry.hostname),
            self.validate_user(entry.user),
            self.validate_port(entry.port),
            self.validate_identity_file(entry.identity_file),
            self.validate_proxy_jump(entry.proxy_jump),
            self.validate_tags(entry.tags),
        ]


def validate_entry(entry: HostEntry, existing_names: Optional[Iterable[str]] = None,
                   current_name: Optional[str] = None) -> List[ValidationResult]:
    """Validate *entry* and return warnings; raise ``ValidationError`` on errors."""
    results = HostEntryValidator(existing_names).validate(entry, current_name)
    errors = [r for r in results if not r.is_valid]
    if errors:
        logger.debug("Validation failed for %s: %s", entry.name, errors)
        raise ValidationError(errors)
    return [r for r in results if r.severity == "warning"]


__all__ = ["ValidationResult", "HostEntryValidator", "validate_entry"]
