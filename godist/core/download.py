# godist/core/download.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Union
import hashlib
import logging
import os
import threading

import requests

from .config import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT
from .errors import Cancelled, ChecksumNotMatched, DownloadError, UnsupportedChecksumAlgorithm
from .http import SESSION
from .models import Package
from .utils import stream_digest

logger = logging.getLogger(__name__)

ProgressCB = Callable[[int, int], None]  # (downloaded_bytes, total_bytes); total 0 = unknown
PathLike = Union[str, Path]

TMP_SUFFIX = ".tmp"

# The closed set of algorithm names the listing may declare
CHECKSUM_ALGORITHMS: Dict[str, Callable[[], "hashlib._Hash"]] = {
    "SHA256": hashlib.sha256,
    "SHA1": hashlib.sha1,
}

@dataclass(frozen=True)
class DownloadTarget:
    """The fields of a Package the downloader needs; no link back to the Catalog."""
    url: str
    file_name: str = ""
    checksum: str = ""
    algorithm: str = ""

    @classmethod
    def from_package(cls, pkg: Package) -> "DownloadTarget":
        return cls(url=pkg.url, file_name=pkg.file_name, checksum=pkg.checksum, algorithm=pkg.algorithm)

class DownloadState(str, Enum):
    NOT_STARTED = "not_started"
    FETCHING = "fetching"
    WRITING = "writing"
    RENAMED = "renamed"
    FAILED = "failed"

class ByteCounter:
    """Observes every chunk written and reports the running total."""

    def __init__(self, total: int = 0, on_progress: Optional[ProgressCB] = None) -> None:
        self.total = total
        self.written = 0
        self._on_progress = on_progress

    def observe(self, chunk: bytes) -> None:
        self.written += len(chunk)
        if self._on_progress:
            self._on_progress(self.written, self.total)

def content_length(headers: Mapping[str, str]) -> int:
    try:
        n = int(headers.get("Content-Length") or 0)
    except (TypeError, ValueError):
        return 0
    return n if n > 0 else 0

def download(
    package: Package,
    destination: PathLike,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Stream package.url straight into destination and return the bytes written.
    Network/HTTP failures raise DownloadError; filesystem errors propagate.
    """
    target = DownloadTarget.from_package(package)
    s = session or SESSION
    written = 0
    logger.debug("Downloading %s -> %s", target.url, destination)
    try:
        with s.get(target.url, stream=True, timeout=timeout or DEFAULT_TIMEOUT) as r:
            r.raise_for_status()
            with open(destination, "wb") as f:
                for chunk in r.iter_content(chunk_size=chunk_size):
                    if not chunk:
                        continue
                    f.write(chunk)
                    written += len(chunk)
    except requests.RequestException as e:
        raise DownloadError(target.url, e) from e
    logger.debug("Wrote %d bytes to %s", written, destination)
    return written

class AtomicDownload:
    """
    Write-to-temp-then-rename download of one package.

    - Writes to <destination>.tmp and os.replace()s it onto destination
    - Calls on_progress(written, total) for every chunk
    - On failure the .tmp file stays where it is; destination is never touched
    - Checks `cancel` before the fetch and between chunks

    state walks NOT_STARTED -> FETCHING -> WRITING -> RENAMED, or ends in
    FAILED from FETCHING/WRITING.
    """

    def __init__(
        self,
        package: Package,
        destination: PathLike,
        on_progress: Optional[ProgressCB] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self.target = DownloadTarget.from_package(package)
        self.destination = Path(destination)
        self.tmp_path = Path(str(destination) + TMP_SUFFIX)
        self.on_progress = on_progress
        self.session = session or SESSION
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.chunk_size = chunk_size
        self.cancel = cancel
        self.state = DownloadState.NOT_STARTED
        self.bytes_written = 0

    def _check_cancel(self) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise Cancelled(self.target.url)

    def run(self) -> Path:
        if self.state is not DownloadState.NOT_STARTED:
            raise RuntimeError(f"download of {self.target.url} already ran ({self.state.value})")
        try:
            self._run()
        except BaseException:
            self.state = DownloadState.FAILED
            logger.debug("Download of %s failed; partial data left in %s", self.target.url, self.tmp_path)
            raise
        return self.destination

    def _run(self) -> None:
        url = self.target.url
        logger.debug("Starting download %s -> %s", url, self.tmp_path)
        self.state = DownloadState.FETCHING
        with open(self.tmp_path, "wb") as out:
            self._check_cancel()
            try:
                with self.session.get(url, stream=True, timeout=self.timeout) as r:
                    r.raise_for_status()
                    counter = ByteCounter(content_length(r.headers), self.on_progress)
                    self.state = DownloadState.WRITING
                    for chunk in r.iter_content(chunk_size=self.chunk_size):
                        self._check_cancel()
                        if not chunk:
                            continue
                        out.write(chunk)
                        counter.observe(chunk)
                        self.bytes_written = counter.written
            except requests.RequestException as e:
                raise DownloadError(url, e) from e

        os.replace(self.tmp_path, self.destination)
        self.state = DownloadState.RENAMED
        logger.debug("Download finished: %s (%d bytes)", self.destination, self.bytes_written)

def download_atomic(
    package: Package,
    destination: PathLike,
    on_progress: Optional[ProgressCB] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel: Optional[threading.Event] = None,
) -> Path:
    return AtomicDownload(
        package, destination, on_progress=on_progress, session=session,
        timeout=timeout, chunk_size=chunk_size, cancel=cancel,
    ).run()

def verify_checksum(package: Package, filename: PathLike) -> None:
    """
    Hash filename with package.algorithm and compare the hex digest to
    package.checksum (case-sensitive).

    Raises UnsupportedChecksumAlgorithm for an algorithm outside
    CHECKSUM_ALGORITHMS and ChecksumNotMatched on a digest mismatch.
    """
    target = DownloadTarget.from_package(package)
    with Path(filename).open("rb") as f:
        factory = CHECKSUM_ALGORITHMS.get(target.algorithm)
        if factory is None:
            raise UnsupportedChecksumAlgorithm(target.algorithm, str(filename))
        digest = stream_digest(f, factory)
    if digest != target.checksum:
        raise ChecksumNotMatched(str(filename), target.checksum, digest)
    logger.debug("Checksum OK (%s) for %s", target.algorithm, filename)

def fetch_verified(
    package: Package,
    destination: PathLike,
    on_progress: Optional[ProgressCB] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel: Optional[threading.Event] = None,
) -> Path:
    """Atomic download followed by checksum verification; returns the artifact path."""
    path = download_atomic(
        package, destination, on_progress=on_progress, session=session,
        timeout=timeout, chunk_size=chunk_size, cancel=cancel,
    )
    verify_checksum(package, path)
    return path
