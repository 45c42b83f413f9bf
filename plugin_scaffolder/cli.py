"""Command-line entry point.

Usage::

    plugin-scaffolder --new-rule
    plugin-scaffolder --new-parser --cwd ./packages
    python -m plugin_scaffolder.cli --init
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import traceback
from pathlib import Path

from .config import ScaffoldConfig
from .generator import ScaffoldGenerator
from .init_wizard import InitWizard
from .utils import console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plugin-scaffolder",
        description="Scaffold rule and parser packages, or a host configuration file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  plugin-scaffolder --new-rule\n"
            "  plugin-scaffolder --new-parser --cwd ./packages\n"
            "  plugin-scaffolder --init\n"
        ),
    )
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument("--new-rule", action="store_true", help="Create a new rule package")
    action.add_argument("--new-parser", action="store_true", help="Create a new parser package")
    action.add_argument("--init", action="store_true", help="Generate a host configuration file")
    parser.add_argument(
        "--cwd",
        default=None,
        help="Directory to create the package or configuration in (default: current directory)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print the full traceback when generation fails",
    )
    return parser


async def run(args: argparse.Namespace) -> bool:
    overrides = {"cwd": Path(args.cwd)} if args.cwd else {}
    config = ScaffoldConfig.from_env(**overrides)

    if args.init:
        return await InitWizard(config).run()

    generator = ScaffoldGenerator(config)
    if args.new_parser:
        return await generator.new_parser()
    return await generator.new_rule()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``plugin-scaffolder``."""
    args = build_parser().parse_args(argv)

    try:
        ok = asyncio.run(run(args))
    except KeyboardInterrupt:
        console.print("[bold yellow]Cancelled.[/bold yellow]")
        sys.exit(130)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if args.debug:
            console.print(f"[dim]{traceback.format_exc()}[/dim]")
        sys.exit(1)

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
