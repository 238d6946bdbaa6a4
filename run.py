#!/usr/bin/env python3
"""
Simple runner for sshdeck from a source checkout
"""

import argparse
import os
import sys
from typing import List, Tuple

CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))

# Ensure the package is importable without installation
sys.path.insert(0, CURRENT_DIR)


def _parse_ui_choice(argv: List[str]) -> Tuple[str, List[str]]:
    """Return the requested front end and the remaining arguments."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--ui",
        choices=["cli", "tui"],
        help="Choose between the command line and the terminal UI",
    )
    args, remaining = parser.parse_known_args(argv)

    env_choice = os.environ.get("SSHDECK_UI", "").strip().lower() or None
    choice = args.ui or env_choice or "tui"
    if choice not in {"cli", "tui"}:
        choice = "tui"

    return choice, remaining


def main() -> int:
    ui_choice, remaining = _parse_ui_choice(sys.argv[1:])

    if ui_choice == "cli":
        from sshdeck.cli import main as cli_main

        return cli_main(remaining)

    from sshdeck.tui.app import main as tui_main

    return tui_main(remaining)


if __name__ == '__main__':
    sys.exit(main())
