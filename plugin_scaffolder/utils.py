"""Shared utility functions for plugin-scaffolder.

Provides the shared Rich console and its reporting helpers, JSON I/O, and the
file-system primitives the wizards build on (directory creation, file writes
and recursive copies).  Blocking file-system calls are exposed as coroutines
that run in a worker thread so they never stall the event loop.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        return {"_root": data}
    return data


async def save_json(
    data: dict[str, Any] | list[Any], path: str | Path, indent: int = 2
) -> Path:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.  The write itself is
    performed in a worker thread.
    """
    file_path = Path(path)
    content = json.dumps(data, indent=indent, ensure_ascii=False, default=str)
    await asyncio.to_thread(_write_with_parents, file_path, content)
    return file_path


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


async def write_text_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, replacing any existing file.

    The parent directory must already exist.
    """
    file_path = Path(path)
    await asyncio.to_thread(file_path.write_text, content, encoding="utf-8")
    return file_path


async def copy_tree(source: str | Path, destination: str | Path) -> Path:
    """Recursively copy *source* into *destination*, merging existing folders."""
    dest = Path(destination)
    await asyncio.to_thread(shutil.copytree, Path(source), dest, dirs_exist_ok=True)
    return dest


def _write_with_parents(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_banner(message: str) -> None:
    """Print a framed banner, used when a wizard starts."""
    console.print(Panel(f"[bold]{message}[/bold]", style="cyan"))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
