# godist/cli.py
from __future__ import annotations
import argparse
import logging
import platform
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple

from . import __version__
from .core import ARCHIVE_KIND, GodistError, Package, setup_logging, url_leaf_name
from .core.config import DEFAULT_CHUNK_SIZE, load_cfg, source_url, timeout as cfg_timeout
from .core.resolve import expected_prefix
from .ui import download_with_progress, err_console, load_catalog, render_packages, render_versions

logger = logging.getLogger(__name__)

# platform.machine() -> listing arch column
_ARCH_NAMES = {
    "x86_64": "amd64", "amd64": "amd64",
    "aarch64": "arm64", "arm64": "arm64",
    "i386": "386", "i686": "386", "x86": "386",
    "armv6l": "armv6l", "armv7l": "armv6l",
}

def host_platform() -> Tuple[str, str]:
    m = platform.machine().lower()
    return platform.system().lower(), _ARCH_NAMES.get(m, m)

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    host_os, host_arch = host_platform()
    ap = argparse.ArgumentParser(prog="godist", description="Go distribution downloader")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("--source", default="", help="Listing URL (default from config)")
    ap.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging for core/network")
    sub = ap.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="List available versions")
    grp = ls.add_mutually_exclusive_group()
    grp.add_argument("--archived", action="store_true", help="Only archived versions")
    grp.add_argument("--all", action="store_true", help="Stable and archived versions")

    show = sub.add_parser("show", help="Show the packages of one version")
    show.add_argument("version")

    get = sub.add_parser("get", help="Download and verify one package")
    get.add_argument("version")
    get.add_argument("--kind", default=ARCHIVE_KIND, help="Archive / Installer / Source")
    get.add_argument("--os", default=host_os, help=f"Target OS (default {host_os})")
    get.add_argument("--arch", default=host_arch, help=f"Target architecture (default {host_arch})")
    get.add_argument("--out", default=".", help="Output directory")
    get.add_argument("--no-verify", action="store_true", help="Skip checksum verification")
    return ap.parse_args(argv)

def artifact_name(pkg: Package) -> str:
    """Bare file name to save pkg under; listing names never pick the directory."""
    raw = pkg.file_name or url_leaf_name(pkg.url)
    name = PurePosixPath(raw.replace("\\", "/")).name
    if name in ("", ".", ".."):
        raise GodistError(f"Package {raw!r} has no usable file name", pkg.url)
    return name

def _find(cat, version: str):
    record = cat.find_version(version)
    if record is None:
        if cat.is_empty():
            err_console.print(f"[red]Listing {cat.source} yielded no versions[/]")
        else:
            err_console.print(f"[red]Version {version} not in listing ({len(cat)} versions)[/]")
    return record

def run(args: argparse.Namespace, cfg: dict) -> int:
    source = args.source or source_url(cfg)
    timeout = args.timeout or cfg_timeout(cfg)

    cat = load_catalog(source, timeout=timeout)

    if args.command == "list":
        if args.archived:
            render_versions(cat.archived_versions(), "Archived versions")
        elif args.all:
            render_versions(cat.all_versions(), "All versions")
        else:
            render_versions(cat.stable_versions(), "Stable versions")
        return 0 if not cat.is_empty() else 1

    record = _find(cat, args.version)
    if record is None:
        return 1

    if args.command == "show":
        render_packages(record)
        return 0

    pkg = record.find_package(args.kind, args.os, args.arch)
    logger.debug("Resolved %s via prefix %s", pkg.file_name, expected_prefix(record, args.os, args.arch))
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    download_with_progress(
        pkg,
        out_dir / artifact_name(pkg),
        verify=not args.no_verify,
        timeout=timeout,
        chunk_size=int(cfg.get("chunk_size") or DEFAULT_CHUNK_SIZE),
    )
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_cfg()
    setup_logging(verbose=args.verbose or bool(cfg.get("verbose")))
    try:
        return run(args, cfg)
    except (GodistError, OSError) as e:
        err_console.print(f"[godist] {e}", style="red", markup=False)
        return 1

if __name__ == "__main__":
    raise SystemExit(main())
