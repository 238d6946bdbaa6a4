from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
import subprocess
from typing import Dict, List, Optional, Sequence

from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import DataTable, Footer, Header, Input, Static

from sshdeck.config_store import SSHConfigStore
from sshdeck.errors import SSHDeckError
from sshdeck.host_entry import HostEntry
from sshdeck.host_sort import DEFAULT_HOST_SORT, sort_hosts
from sshdeck.search_utils import filter_hosts
from sshdeck.settings import Settings
from sshdeck.tui.command_builder import build_ssh_command
from sshdeck.tui.editor import HostEditSession

LOG = logging.getLogger(__name__)


class HostTable(DataTable):
    """Host list with row cursor and zebra stripes."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True


class HelpScreen(ModalScreen[None]):
    """Modal overlay listing keyboard shortcuts."""

    def compose(self) -> ComposeResult:
        lines = [
            "[b]sshdeck[/b]",
            "",
            "Navigation:",
            "  ↑/↓          Move selection",
            "  PgUp/PgDn    Scroll a page",
            "",
            "Actions:",
            "  Enter / c    Connect to highlighted host",
            "  a            Add host",
            "  e            Edit host",
            "  d            Delete host",
            "  r / F5       Reload SSH config",
            "  /            Filter (use tag:<name> for tags)",
            "  Esc          Return focus to the list",
            "  q            Quit",
            "",
            "Press Esc, q, or ? to close this help.",
        ]
        yield Static("\n".join(lines), id="help-panel")

    def on_key(self, event: events.Key) -> None:
        if event.key in {"escape", "q", "?"}:
            event.stop()
            self.dismiss()


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no question answered with y or n."""

    def __init__(self, question: str, **kwargs):
        super().__init__(**kwargs)
        self.question = question

    def compose(self) -> ComposeResult:
        yield Static(f"{self.question}\n\n[b]y[/b] yes    [b]n[/b] no", id="confirm-panel")

    def on_key(self, event: events.Key) -> None:
        if event.key in {"y", "Y"}:
            event.stop()
            self.dismiss(True)
        elif event.key in {"n", "N", "escape", "q"}:
            event.stop()
            self.dismiss(False)


class DetailsPanel(Static):
    """Shows information about the selected host."""

    def show_empty(self, message: str = "Select a host to see details.") -> None:
        self.update(message)

    def show_host(self, entry: Optional[HostEntry]) -> None:
        if not entry:
            self.show_empty()
            return

        lines = [
            f"[b]Host[/b]          {entry.name}",
            f"[b]HostName[/b]      {entry.hostname or '-'}",
            f"[b]User[/b]          {entry.user or '-'}",
            f"[b]Port[/b]          {entry.effective_port}",
            f"[b]IdentityFile[/b]  {entry.identity_file or 'default'}",
        ]
        if entry.proxy_jump:
            lines.append(f"[b]ProxyJump[/b]     {entry.proxy_jump}")
        if entry.tags:
            lines.append(f"[b]Tags[/b]          {', '.join(entry.tags)}")
        self.update("\n".join(lines))


class StatusBar(Static):
    """Single-line status indicator."""

    def set_message(self, message: str, *, error: bool = False) -> None:
        self.set_class(error, "error")
        self.update(message or "")


class SSHDeckApp(App[None]):
    """Textual interface for browsing and editing the hosts of an SSH config."""

    TITLE = "sshdeck"
    CSS = """
    Screen {
        layout: vertical;
    }

    HelpScreen, ConfirmScreen {
        align: center middle;
    }

    #body {
        height: 1fr;
        padding: 1 2;
    }

    #list-panel, #details-panel {
        height: 1fr;
    }

    #details-panel {
        border: round $secondary;
        padding: 1;
        width: 45;
    }

    #host-table {
        height: 1fr;
    }

    #status {
        height: 3;
        content-align: left middle;
        padding: 0 1;
        background: $boost;
    }

    #status.error {
        background: $error;
        color: $text;
    }

    .panel-title {
        text-style: bold;
        padding-bottom: 1;
    }

    #filter {
        margin-bottom: 1;
    }

    #help-panel, #confirm-panel {
        width: 60%;
        height: auto;
        background: $surface;
        border: round $secondary;
        padding: 2;
    }
    """

    BINDINGS = [
        Binding("q", "quit_app", "Quit"),
        Binding("c", "connect", "Connect"),
        Binding("a", "add", "Add"),
        Binding("e", "edit", "Edit"),
        Binding("d", "delete", "Delete"),
        Binding("r", "reload", "Reload"),
        Binding("f5", "reload", "Reload", show=False),
        Binding("/", "focus_filter", "Filter"),
        Binding("escape", "focus_list", "Focus list", show=False),
        Binding("?", "show_help", "Help"),
    ]

    def __init__(self, *, store: Optional[SSHConfigStore] = None, settings: Optional[Settings] = None, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings or Settings()
        self.store = store or SSHConfigStore(
            self.settings.get_ssh_config_path(),
            tag_policy=self.settings.get_setting("ssh.tag_policy"),
        )
        self.hosts: List[HostEntry] = []
        self.filtered_hosts: List[HostEntry] = []
        self.row_map: Dict[str, HostEntry] = {}
        self.filter_text = ""
        self._selected_name: Optional[str] = None
        self._status_timer: Optional[Timer] = None

    # --------------------------------------------------------------------- UI
    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="body"):
            with Vertical(id="list-panel"):
                yield Static(self.store.config_path, classes="panel-title")
                yield Input(placeholder="Filter hosts… (tag:name)", id="filter")
                table = HostTable(id="host-table")
                table.add_columns("Host", "HostName", "User", "Port", "Tags")
                yield table
            with Vertical(id="details-panel"):
                yield Static("Details", classes="panel-title")
                yield DetailsPanel(id="details")
        yield Footer()
        yield StatusBar(id="status")

    def on_mount(self) -> None:
        self.status_bar = self.query_one(StatusBar)
        self.details_panel = self.query_one(DetailsPanel)
        self.filter_input = self.query_one("#filter", Input)
        self.host_table = self.query_one(HostTable)
        self.host_table.focus()
        self.details_panel.show_empty()
        self.load_hosts()

    # ---------------------------------------------------------------- bindings
    def action_quit_app(self) -> None:
        self.exit()

    def action_reload(self) -> None:
        self.load_hosts()

    def action_connect(self) -> None:
        entry = self.get_selected_host()
        if not entry:
            self.set_status("No host selected", error=True)
            return
        cmd = build_ssh_command(entry, self.store.config_path)
        display_cmd = " ".join(shlex.quote(part) for part in cmd)
        self.set_status(f"Connecting with: {display_cmd}", persist=True)
        try:
            with self.suspend():
                try:
                    rc = subprocess.run(cmd).returncode
                except FileNotFoundError:
                    rc = -1
                    print("ssh executable was not found on PATH.")
        except SuspendNotSupported:
            self.set_status("This terminal cannot hand over to ssh", error=True)
            return
        if rc == 0:
            self.set_status("SSH session ended")
        else:
            self.set_status(f"SSH exited with code {rc}", error=True)

    async def action_add(self) -> None:
        new_entry = self._run_editor(None)
        if new_entry is None:
            return
        await self._write(self.store.add_host, new_entry, success=f"Added {new_entry.name}")
        self._selected_name = new_entry.name
        self.apply_filter()

    async def action_edit(self) -> None:
        entry = self.get_selected_host()
        if not entry:
            self.set_status("No host selected", error=True)
            return
        updated = self._run_editor(entry)
        if updated is None:
            return
        await self._write(self.store.update_host, entry.name, updated, success=f"Updated {updated.name}")
        self._selected_name = updated.name
        self.apply_filter()

    def action_delete(self) -> None:
        entry = self.get_selected_host()
        if not entry:
            self.set_status("No host selected", error=True)
            return

        def _answered(confirmed: Optional[bool]) -> None:
            if confirmed:
                self.run_worker(self.delete_host(entry.name), exclusive=True)
            else:
                self.set_status("Delete cancelled")

        self.push_screen(ConfirmScreen(f"Delete host '{entry.name}'?"), _answered)

    def action_focus_filter(self) -> None:
        self.filter_input.focus()
        self.filter_input.cursor_position = len(self.filter_input.value)

    def action_focus_list(self) -> None:
        self.host_table.focus()

    def action_show_help(self) -> None:
        self.push_screen(HelpScreen())

    # ----------------------------------------------------------------- events
    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input is self.filter_input:
            self.filter_text = event.value
            self.apply_filter()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input is self.filter_input:
            self.host_table.focus()

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if event.data_table is not self.host_table or event.row_key is None:
            return
        entry = self.row_map.get(event.row_key.value)
        if entry:
            self._selected_name = entry.name
            self.details_panel.show_host(entry)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table is self.host_table:
            event.stop()
            self.action_connect()

    # ----------------------------------------------------------------- data ops
    def load_hosts(self) -> None:
        try:
            hosts = self.store.list_hosts()
        except OSError as exc:
            LOG.exception("Failed to load hosts")
            self.set_status(f"Unable to read {self.store.config_path}: {exc}", error=True, persist=True)
            return
        self.hosts = sort_hosts(hosts, self.settings.get_setting("ui.sort", DEFAULT_HOST_SORT))
        self.apply_filter()
        self.set_status(f"Loaded {len(hosts)} host(s)")

    async def delete_host(self, name: str) -> None:
        await self._write(self.store.delete_host, name, success=f"Deleted {name}")
        if self._selected_name == name:
            self._selected_name = None
        self.apply_filter()

    async def _write(self, operation, *args, success: str) -> bool:
        try:
            await asyncio.to_thread(operation, *args)
        except (SSHDeckError, OSError) as exc:
            LOG.error("SSH config update failed: %s", exc)
            self.set_status(str(exc), error=True, persist=True)
            return False
        self.load_hosts()
        self.set_status(success, persist=True)
        return True

    def _run_editor(self, entry: Optional[HostEntry]) -> Optional[HostEntry]:
        names = [host.name for host in self.hosts]
        try:
            with self.suspend():
                result = HostEditSession(entry, existing_names=names).run()
        except SuspendNotSupported:
            self.set_status("Editing needs an interactive terminal", error=True)
            return None
        if result is None:
            self.set_status("Edit cancelled")
        return result

    def apply_filter(self) -> None:
        table = self.host_table
        self.filtered_hosts = filter_hosts(self.hosts, self.filter_text)
        table.clear(columns=False)
        self.row_map.clear()

        show_tags = bool(self.settings.get_setting("ui.show_tags", True))
        selected_key: Optional[str] = None
        for idx, entry in enumerate(self.filtered_hosts):
            row_key = f"row-{idx}"
            table.add_row(
                entry.name,
                entry.hostname or "?",
                entry.user or "-",
                entry.effective_port,
                ", ".join(entry.tags) if show_tags else "",
                key=row_key,
            )
            self.row_map[row_key] = entry
            if entry.name == self._selected_name:
                selected_key = row_key

        if self.row_map:
            row_key = selected_key or next(iter(self.row_map))
            table.move_cursor(row=table.get_row_index(row_key))
            entry = self.row_map[row_key]
            self._selected_name = entry.name
            self.details_panel.show_host(entry)
        else:
            needle = self.filter_text.strip()
            self.details_panel.show_empty("No matches for current filter" if needle else "No hosts configured")

    def get_selected_host(self) -> Optional[HostEntry]:
        row = self.host_table.cursor_row
        if 0 <= row < len(self.filtered_hosts):
            return self.filtered_hosts[row]
        return None

    # ----------------------------------------------------------------- status
    def set_status(self, message: str, *, error: bool = False, persist: bool = False) -> None:
        if not hasattr(self, "status_bar"):
            return
        if self._status_timer:
            self._status_timer.stop()
            self._status_timer = None
        self.status_bar.set_message(message, error=error)
        if not persist:
            self._status_timer = self.set_timer(6, self._clear_status, name="status-clear")

    def _clear_status(self) -> None:
        self.status_bar.set_message("")
        self._status_timer = None


def parse_args(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="sshdeck terminal UI")
    parser.add_argument("--config", "-F", help="SSH config file to manage (default: ~/.ssh/config)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    settings = Settings()
    store = SSHConfigStore(
        args.config or settings.get_ssh_config_path(),
        tag_policy=settings.get_setting("ssh.tag_policy"),
    )
    app = SSHDeckApp(store=store, settings=settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
    return 0


__all__ = ["main", "SSHDeckApp"]
