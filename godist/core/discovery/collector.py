"""
godist.core.discovery.collector
Turns the published download listing into a Catalog.

Only reaching the source can fail. Layout surprises (missing anchors, blocks
without an id, short rows) degrade to missing data; check Catalog.is_empty()
to tell "nothing parsed" apart from "nothing matched".
"""

from __future__ import annotations
import logging
import threading
from typing import List, Optional, Tuple, Union
from urllib.parse import urljoin

import requests

from ..config import DEFAULT_TIMEOUT, DEFAULT_URL
from ..errors import Cancelled, Unreachable
from ..http import SESSION
from ..models import PACKAGE_LEAD, Catalog, Package, VersionRecord
from .document import Block, ListingDocument

logger = logging.getLogger(__name__)

CHECKSUM_SUFFIX = " Checksum"
STABLE_ID = "stable"
ARCHIVE_ID = "archive"
ARCHIVE_BLOCK_SELECTOR = "div.toggle"

# Fixed column positions of the package table
COL_FILE, COL_KIND, COL_OS, COL_ARCH, COL_SIZE, COL_CHECKSUM = range(6)

def fetch_document(
    source: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> bytes:
    """GET the listing and return its raw body; raises Unreachable on failure."""
    if cancel is not None and cancel.is_set():
        raise Cancelled(source)
    s = session or SESSION
    logger.debug("Fetching listing %s", source)
    try:
        with s.get(source, timeout=timeout or DEFAULT_TIMEOUT) as r:
            if r.status_code != 200:
                logger.debug("Listing %s answered HTTP %s", source, r.status_code)
                raise Unreachable(source)
            return r.content
    except requests.RequestException as e:
        raise Unreachable(source, e) from e

def _version_name(block_id: str) -> str:
    return block_id[len(PACKAGE_LEAD):] if block_id.startswith(PACKAGE_LEAD) else block_id

def _packages(block: Block, source: str) -> Tuple[Package, ...]:
    table = block.first_table()
    if table is None:
        return ()
    labels = table.header_labels()
    alg = labels[-1] if labels else ""
    if alg.endswith(CHECKSUM_SUFFIX):
        alg = alg[: -len(CHECKSUM_SUFFIX)]

    pkgs: List[Package] = []
    for row in table.rows():
        file_name, href = row.link(COL_FILE)
        checksum = row.cell(COL_CHECKSUM)
        # checksum and algorithm travel together or not at all
        if not (checksum and alg):
            checksum, algorithm = "", ""
        else:
            algorithm = alg
        pkgs.append(Package(
            file_name=file_name,
            url=urljoin(source, href) if href else "",
            kind=row.cell(COL_KIND),
            os=row.cell(COL_OS),
            arch=row.cell(COL_ARCH),
            size=row.cell(COL_SIZE),
            checksum=checksum,
            algorithm=algorithm,
        ))
    return tuple(pkgs)

def _records(blocks: List[Block], source: str) -> Tuple[VersionRecord, ...]:
    return tuple(VersionRecord(_version_name(b.id), _packages(b, source)) for b in blocks)

class Collector:
    """One fetched (or supplied) listing, queried zone by zone."""

    def __init__(self, document: ListingDocument, source: str = DEFAULT_URL) -> None:
        self.source = source
        self._doc = document

    @classmethod
    def fetch(
        cls,
        source: str = "",
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> "Collector":
        source = source or DEFAULT_URL
        return cls(ListingDocument(fetch_document(source, session, timeout, cancel)), source)

    @classmethod
    def from_html(cls, html: Union[str, bytes], source: str = DEFAULT_URL) -> "Collector":
        return cls(ListingDocument(html), source or DEFAULT_URL)

    def stable_versions(self) -> List[VersionRecord]:
        return list(_records(self._doc.zone_after(STABLE_ID, ARCHIVE_ID), self.source))

    def archived_versions(self) -> List[VersionRecord]:
        return list(_records(self._doc.zone_within(ARCHIVE_ID, ARCHIVE_BLOCK_SELECTOR), self.source))

    def all_versions(self) -> List[VersionRecord]:
        return self.stable_versions() + self.archived_versions()

    def catalog(self) -> Catalog:
        cat = Catalog(
            source=self.source,
            stable=tuple(self.stable_versions()),
            archived=tuple(self.archived_versions()),
        )
        if cat.is_empty():
            logger.warning(
                "No versions parsed from %s (stable anchor %s, archive anchor %s)",
                self.source,
                "found" if self._doc.has_anchor(STABLE_ID) else "missing",
                "found" if self._doc.has_anchor(ARCHIVE_ID) else "missing",
            )
        else:
            logger.debug("Parsed %d stable + %d archived versions from %s",
                         len(cat.stable), len(cat.archived), self.source)
        return cat

def parse_catalog(html: Union[str, bytes], source: str = DEFAULT_URL) -> Catalog:
    return Collector.from_html(html, source).catalog()

def fetch_catalog(
    source: str = "",
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> Catalog:
    """Fetch the listing at source (DEFAULT_URL when empty) and parse it."""
    return Collector.fetch(source, session=session, timeout=timeout, cancel=cancel).catalog()
