# godist/core/__init__.py
from .models import Package, VersionRecord, Catalog, SOURCE_KIND, ARCHIVE_KIND, INSTALLER_KIND
from .errors import (
    GodistError, Unreachable, DownloadError, PackageNotFound,
    UnsupportedChecksumAlgorithm, ChecksumNotMatched, Cancelled,
)
from .discovery import Collector, fetch_catalog, parse_catalog
from .resolve import find_package, expected_prefix
from .download import (
    download, download_atomic, verify_checksum, fetch_verified,
    AtomicDownload, DownloadState,
)
from .utils import url_leaf_name
from .http import SESSION
from .config import load_cfg, save_cfg, config_path, DEFAULT_URL

__all__ = [
    "Package", "VersionRecord", "Catalog",
    "SOURCE_KIND", "ARCHIVE_KIND", "INSTALLER_KIND",
    "GodistError", "Unreachable", "DownloadError", "PackageNotFound",
    "UnsupportedChecksumAlgorithm", "ChecksumNotMatched", "Cancelled",
    "Collector", "fetch_catalog", "parse_catalog",
    "find_package", "expected_prefix",
    "download", "download_atomic", "verify_checksum", "fetch_verified",
    "AtomicDownload", "DownloadState",
    "url_leaf_name",
    "SESSION",
    "load_cfg", "save_cfg", "config_path", "DEFAULT_URL",
    "setup_logging",
]

# ---- simple logging toggle for the package ----
import logging

def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s"
    )
    # quiet down noisy deps
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
