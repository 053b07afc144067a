#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Console layer for godist

- Version / package tables
- Status spinner while fetching the listing
- Atomic download with a progress bar + checksum verify
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich import box
from rich.progress import (
    BarColumn, Progress, TextColumn, TimeRemainingColumn, TransferSpeedColumn
)

from .core import (
    Catalog,
    Package,
    VersionRecord,
    fetch_catalog,
    download_atomic,
    verify_checksum,
)
from .core.config import DEFAULT_CHUNK_SIZE

console = Console()
err_console = Console(stderr=True)

# ────────────────────────── Listing ──────────────────────────
def load_catalog(source: str, timeout: Optional[float] = None) -> Catalog:
    with console.status(f"Fetching {source or 'default listing'}…"):
        cat = fetch_catalog(source, timeout=timeout)
    if cat.is_empty():
        err_console.print(
            f"[yellow]No versions parsed from {cat.source}[/] "
            "(the page layout may have changed)"
        )
    return cat

def render_versions(versions: Iterable[VersionRecord], title: str = "Versions") -> None:
    t = Table(title=title, box=box.SIMPLE_HEAVY)
    t.add_column("#", justify="right", style="dim")
    t.add_column("Version", style="bold")
    t.add_column("Packages", justify="right")
    for i, v in enumerate(versions, 1):
        t.add_row(str(i), v.name, str(len(v.packages)))
    console.print(t)

def render_packages(record: VersionRecord) -> None:
    t = Table(title=f"go{record.name}", box=box.SIMPLE_HEAVY)
    for col in ("File name", "Kind", "OS", "Arch", "Size", "Checksum"):
        t.add_column(col)
    for p in record.packages:
        if p is None:
            continue
        checksum = f"{p.algorithm}:{p.checksum[:12]}…" if p.checksum else "-"
        t.add_row(p.file_name, p.kind, p.os or "-", p.arch or "-", p.size, checksum)
    console.print(t)

# ────────────────────────── Download ──────────────────────────
def download_with_progress(
    pkg: Package,
    out_path: Path,
    verify: bool = True,
    timeout: Optional[float] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Path:
    task_desc = f"[bold]Downloading[/] {out_path.name}"
    with Progress(
        TextColumn(task_desc, justify="left"),
        BarColumn(),
        TransferSpeedColumn(),
        TextColumn("{task.completed:>10.0f} B"),
        TimeRemainingColumn(),
        console=console,
        transient=False
    ) as progress:
        # total None -> indeterminate bar until Content-Length is known
        task_id = progress.add_task("dl", total=None)

        def on_progress(done: int, total: int) -> None:
            progress.update(task_id, completed=done, total=total or None)

        download_atomic(pkg, out_path, on_progress=on_progress, timeout=timeout, chunk_size=chunk_size)

    if verify:
        console.print("Verifying checksum…")
        verify_checksum(pkg, out_path)
        console.print(f"[green]Checksum OK[/] ({pkg.algorithm})")

    console.print(f"[bold green]Download Complete![/] Saved to: {out_path}")
    return out_path
