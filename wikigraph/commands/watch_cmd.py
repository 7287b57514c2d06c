"""Watch command - re-export site artifacts whenever content changes."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console

from ..pages.loader import DEFAULT_EXTENSIONS
from ..watcher import run_watch_loop
from .export_cmd import run_export

logger = logging.getLogger(__name__)


def run_watch(
    content_path: Path,
    out_dir: Path,
    *,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> int:
    """
    Export once, then again after every settled batch of content changes.

    This is a blocking command that runs until interrupted (Ctrl+C).
    """
    console = Console(stderr=True)

    console.print(f"[bold]Watching[/bold] {content_path}")
    console.print(f"  Output: {out_dir}")
    console.print()
    console.print("[dim]Press Ctrl+C to stop watching[/dim]")
    console.print()

    run_export(content_path, out_dir, extensions=extensions)
    rebuild_count = 0

    def on_change(paths: set[Path]) -> None:
        nonlocal rebuild_count
        timestamp = datetime.now().strftime("%H:%M:%S")
        for path in sorted(paths):
            logger.debug("Changed: %s", path)
        try:
            run_export(content_path, out_dir, extensions=extensions, quiet=True)
        except OSError as e:
            console.print(f"[dim]{timestamp}[/dim] [red]Export failed:[/red] {e}")
            return
        rebuild_count += 1
        console.print(f"[dim]{timestamp}[/dim] Rebuilt after {len(paths)} change(s)")

    run_watch_loop(content_path, on_change, extensions=extensions)

    console.print()
    console.print(f"[bold]Stopped.[/bold] Rebuilt {rebuild_count} times.")
    return 0
