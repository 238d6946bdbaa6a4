"""Command line interface for sshdeck."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional, Sequence

from .config_store import SSHConfigStore
from .errors import HostNotFoundError, SSHDeckError, ValidationError
from .host_entry import DEFAULT_PORT, HostEntry
from .host_sort import DEFAULT_HOST_SORT, HOST_SORT_PRESETS, sort_hosts
from .search_utils import filter_hosts
from .settings import Settings
from .validation import validate_entry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def _print_table(hosts: List[HostEntry]):
    rows = [("HOST", "HOSTNAME", "USER", "PORT", "TAGS")]
    for host in hosts:
        rows.append((host.name, host.hostname or "-", host.user or "-", host.effective_port, ",".join(host.tags)))
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    for row in rows:
        print("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())


def _print_host(host: HostEntry):
    print(f"Host         {host.name}")
    print(f"HostName     {host.hostname}")
    print(f"User         {host.user}")
    print(f"Port         {host.effective_port}")
    print(f"IdentityFile {host.identity_file}")
    print(f"ProxyJump    {host.proxy_jump}")
    print(f"Tags         {', '.join(host.tags)}")


def _add_field_options(parser: argparse.ArgumentParser, *, required_hostname: bool):
    parser.add_argument("--hostname", required=required_hostname, help="HostName directive")
    parser.add_argument("--user", help="User directive")
    parser.add_argument("--port", help="Port directive (22 is omitted from the file)")
    parser.add_argument("--identity-file", dest="identity_file", help="IdentityFile directive")
    parser.add_argument("--proxy-jump", dest="proxy_jump", help="ProxyJump directive ([user@]host[:port])")
    parser.add_argument("--tag", dest="tags", action="append", help="Tag label (repeatable)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sshdeck", description="Manage Host entries in your SSH config")
    parser.add_argument("--config", "-F", help="SSH config file to manage (default: ~/.ssh/config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose debug logging")
    parser.add_argument(
        "--tag-policy",
        choices=["pending", "adjacent"],
        help="How '# Tags:' comments attach to hosts",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = sub.add_parser("list", help="List hosts")
    list_parser.add_argument("--tag", help="Only hosts carrying this tag")
    list_parser.add_argument("--search", help="Case-insensitive text filter")
    list_parser.add_argument("--sort", choices=sorted(HOST_SORT_PRESETS), help="Sort order")

    show_parser = sub.add_parser("show", help="Show one host")
    show_parser.add_argument("name")

    add_parser = sub.add_parser("add", help="Add a host")
    add_parser.add_argument("name")
    _add_field_options(add_parser, required_hostname=True)

    edit_parser = sub.add_parser("edit", help="Change an existing host")
    edit_parser.add_argument("name")
    edit_parser.add_argument("--name", dest="new_name", help="Rename the host")
    _add_field_options(edit_parser, required_hostname=False)
    edit_parser.add_argument("--clear-tags", action="store_true", help="Remove all tags before adding --tag values")

    delete_parser = sub.add_parser("delete", help="Delete a host")
    delete_parser.add_argument("name")
    delete_parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    sub.add_parser("tags", help="List tags in use")
    sub.add_parser("tui", help="Start the terminal UI")
    return parser


def _entry_from_args(args, base: Optional[HostEntry] = None) -> HostEntry:
    if base is None:
        return HostEntry(
            name=args.name,
            hostname=args.hostname or "",
            user=args.user or "",
            port=args.port or DEFAULT_PORT,
            identity_file=args.identity_file or "",
            proxy_jump=args.proxy_jump or "",
            tags=args.tags or [],
        )

    changes = {}
    if args.new_name:
        changes["name"] = args.new_name
    for field in ("hostname", "user", "port", "identity_file", "proxy_jump"):
        value = getattr(args, field)
        if value is not None:
            changes[field] = value
    tags = [] if args.clear_tags else list(base.tags)
    tags.extend(args.tags or [])
    changes["tags"] = tags
    return dataclasses.replace(base, **changes)


def _confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def run(args, store: SSHConfigStore, settings: Settings) -> int:
    if args.command == "list":
        hosts = store.list_hosts()
        if args.tag:
            hosts = filter_hosts(hosts, f"tag:{args.tag}")
        if args.search:
            hosts = filter_hosts(hosts, args.search)
        hosts = sort_hosts(hosts, args.sort or settings.get_setting("ui.sort", DEFAULT_HOST_SORT))
        _print_table(hosts)
    elif args.command == "show":
        _print_host(store.get_host(args.name))
    elif args.command == "add":
        entry = _entry_from_args(args)
        names = [host.name for host in store.list_hosts()]
        for warning in validate_entry(entry, names):
            print(f"warning: {warning.field}: {warning.message}", file=sys.stderr)
        store.add_host(entry)
        print(f"Added {entry.name}")
    elif args.command == "edit":
        current = store.get_host(args.name)
        entry = _entry_from_args(args, current)
        names = [host.name for host in store.list_hosts()]
        for warning in validate_entry(entry, names, current_name=args.name):
            print(f"warning: {warning.field}: {warning.message}", file=sys.stderr)
        store.update_host(args.name, entry)
        print(f"Updated {entry.name}")
    elif args.command == "delete":
        if not store.host_exists(args.name):
            raise HostNotFoundError(args.name, store.config_path)
        if not args.yes and not _confirm(f"Delete host '{args.name}'? [y/N] "):
            print("Aborted")
            return EXIT_ERROR
        store.delete_host(args.name)
        print(f"Deleted {args.name}")
    elif args.command == "tags":
        for tag in store.list_tags():
            print(tag)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    settings = Settings()
    config_path = args.config or settings.get_ssh_config_path()
    tag_policy = args.tag_policy or settings.get_setting("ssh.tag_policy")

    if args.command == "tui":
        from .tui.app import SSHDeckApp

        SSHDeckApp(store=SSHConfigStore(config_path, tag_policy=tag_policy), settings=settings).run()
        return EXIT_OK

    store = SSHConfigStore(config_path, tag_policy=tag_policy)
    try:
        return run(args, store, settings)
    except ValidationError as e:
        for result in e.results:
            print(f"error: {result.field}: {result.message}", file=sys.stderr)
        return EXIT_ERROR
    except (SSHDeckError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
