"""Error kinds raised by the collector, resolver and downloader.

Every error carries the location it concerns (``context``) and, where there
was one, the underlying exception (``cause``) so the CLI can branch on the
kind and still print an actionable message.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "GodistError",
    "Unreachable",
    "DownloadError",
    "PackageNotFound",
    "UnsupportedChecksumAlgorithm",
    "ChecksumNotMatched",
    "Cancelled",
]


class GodistError(RuntimeError):
    """Base exception for catalog, resolution and download failures."""

    def __init__(self, message: str, context: str = "", cause: Optional[BaseException] = None) -> None:
        if cause is not None:
            message = f"{message} ==> {cause}"
        super().__init__(message)
        self.context = context
        self.cause = cause


class Unreachable(GodistError):
    """Raised when the catalog source cannot be fetched or answers non-200."""

    def __init__(self, source: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"URL {source!r} is unreachable", source, cause)
        self.source = source


class DownloadError(GodistError):
    """Raised when fetching a package fails at the transport or HTTP level."""

    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Installation package ({url}) download failed", url, cause)
        self.url = url


class PackageNotFound(GodistError):
    """Raised when no package of a version matches kind/os/arch."""

    def __init__(self, version: str, kind: str, os: str, arch: str) -> None:
        super().__init__(
            f"No {kind} package for go{version} on {os}/{arch}",
            f"go{version}",
        )
        self.version = version
        self.kind = kind
        self.os = os
        self.arch = arch


class UnsupportedChecksumAlgorithm(GodistError):
    def __init__(self, algorithm: str, filename: str = "") -> None:
        super().__init__(f"Unsupported checksum algorithm {algorithm!r}", filename)
        self.algorithm = algorithm


class ChecksumNotMatched(GodistError):
    """Raised when a file's digest differs from the published checksum."""

    def __init__(self, filename: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Checksum mismatch for {filename}: expected {expected}, got {actual}",
            filename,
        )
        self.expected = expected
        self.actual = actual


class Cancelled(GodistError):
    def __init__(self, context: str) -> None:
        super().__init__(f"Cancelled while fetching {context}", context)
