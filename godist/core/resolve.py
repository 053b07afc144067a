"""Pick one package out of a VersionRecord by kind, OS and architecture."""

from __future__ import annotations
import logging
from typing import Tuple

from .errors import PackageNotFound
from .models import PACKAGE_LEAD, Package, VersionRecord

logger = logging.getLogger(__name__)

def normalize_platform(os: str, arch: str) -> Tuple[str, str]:
    # linux/x86_64 is looked up as the 386 build
    if os == "linux" and arch == "x86_64":
        arch = "386"
    return os, arch

def expected_prefix(record: VersionRecord, os: str, arch: str) -> str:
    os, arch = normalize_platform(os, arch)
    return f"{PACKAGE_LEAD}{record.name}.{os}-{arch}"

def find_package(record: VersionRecord, kind: str, os: str, arch: str) -> Package:
    """
    Return the first package, in listing order, whose kind equals `kind`
    (case-insensitive) and whose file name starts with go<version>.<os>-<arch>.
    Raises PackageNotFound when nothing matches.
    """
    prefix = expected_prefix(record, os, arch)
    wanted = (kind or "").casefold()
    for pkg in record.packages:
        if pkg is None:
            continue
        if pkg.kind.casefold() == wanted and pkg.file_name.startswith(prefix):
            return pkg
    logger.debug("No %s package with prefix %s among %d", kind, prefix, len(record.packages))
    raise PackageNotFound(record.name, kind, os, arch)
