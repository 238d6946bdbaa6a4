from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from sshdeck.host_entry import DEFAULT_PORT, HostEntry, normalize_tags
from sshdeck.validation import HostEntryValidator, ValidationResult

PromptFunc = Callable[[str], str]
PrintFunc = Callable[[str], None]


class HostEditSession:
    """
    Prompt-driven editor for creating or changing a host entry.

    The session interacts through ``input_func``/``print_func`` so it can run both interactively
    and under tests.
    """

    def __init__(
        self,
        entry: Optional[HostEntry] = None,
        *,
        existing_names: Iterable[str] = (),
        input_func: PromptFunc = input,
        print_func: PrintFunc = print,
    ):
        self.entry = entry
        self.input = input_func
        self.print = print_func
        self.validator = HostEntryValidator(existing_names)

    def run(self) -> Optional[HostEntry]:
        """
        Prompt the user for values. Returns the edited entry or ``None`` on cancel.
        """

        try:
            return self._run()
        except (KeyboardInterrupt, EOFError):
            self.print("\nEdit cancelled.")
            return None

    def _run(self) -> Optional[HostEntry]:
        entry = self.entry or HostEntry(name="")
        current_name = self.entry.name if self.entry else None
        title = "Edit host" if self.entry else "New host"
        self.print(f"\n--- {title} ---")
        self.print("Press Enter to keep current values, '-' to clear a field, Ctrl+C to abort.\n")

        name = self._ask_validated(
            "Name", entry.name, lambda v: self.validator.validate_name(v, current_name), required=True
        )
        hostname = self._ask_validated("HostName", entry.hostname, self.validator.validate_hostname, required=True)
        user = self._ask_validated("User", entry.user, self.validator.validate_user, allow_clear=True)
        port = self._ask_validated(
            "Port", entry.port or DEFAULT_PORT, self.validator.validate_port, allow_clear=True
        ) or DEFAULT_PORT
        identity = self._ask_validated(
            "IdentityFile", entry.identity_file, self.validator.validate_identity_file, allow_clear=True
        )
        proxy_jump = self._ask_validated(
            "ProxyJump", entry.proxy_jump, self.validator.validate_proxy_jump, allow_clear=True
        )
        tags = self._ask_tags(entry.tags)

        return HostEntry(
            name=name,
            hostname=hostname,
            user=user,
            port=port,
            identity_file=identity,
            proxy_jump=proxy_jump,
            tags=tags,
        )

    # ------------------------------------------------------------------ helpers
    def _ask_text(self, label: str, current: str, *, required: bool = False, allow_clear: bool = False) -> str:
        base_prompt = f"{label}"
        if current:
            base_prompt += f" [{current}]"
        if allow_clear and current:
            base_prompt += " (type '-' to clear)"
        base_prompt += ": "

        while True:
            resp = self.input(base_prompt)
            if resp is None:
                resp = ""
            resp = resp.strip()
            if not resp:
                if current or not required:
                    return current
                self.print(f"{label} is required.")
                continue
            if allow_clear and resp == "-":
                return ""
            return resp

    def _ask_validated(
        self,
        label: str,
        current: str,
        check: Callable[[str], ValidationResult],
        *,
        required: bool = False,
        allow_clear: bool = False,
    ) -> str:
        while True:
            value = self._ask_text(label, current, required=required, allow_clear=allow_clear)
            result = check(value)
            if result.is_valid:
                if result.severity == "warning" and result.message:
                    self.print(f"Warning: {result.message}")
                return value
            self.print(result.message)

    def _ask_tags(self, current: List[str]) -> List[str]:
        shown = ", ".join(current or [])
        while True:
            raw = self._ask_text("Tags (comma separated)", shown, allow_clear=True)
            tags = normalize_tags(raw.split(",")) if raw else []
            result = self.validator.validate_tags(tags)
            if result.is_valid:
                return tags
            self.print(result.message)


__all__ = ["HostEditSession"]
