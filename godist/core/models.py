from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

# Lead string of every file name and version block id in the listing
PACKAGE_LEAD = "go"

# Kind labels as they appear in the listing's "Kind" column
SOURCE_KIND = "Source"
ARCHIVE_KIND = "Archive"
INSTALLER_KIND = "Installer"

@dataclass(frozen=True)
class Package:
    file_name: str = ""
    url: str = ""
    kind: str = ""
    os: str = ""
    arch: str = ""
    size: str = ""          # display string, e.g. "66MB"
    checksum: str = ""
    algorithm: str = ""     # e.g. "SHA256"; validated only at verify time

@dataclass(frozen=True)
class VersionRecord:
    name: str
    packages: Tuple[Optional[Package], ...] = ()

    def find_package(self, kind: str, os: str, arch: str) -> Package:
        # late import to avoid circulars
        from .resolve import find_package
        return find_package(self, kind, os, arch)

@dataclass(frozen=True)
class Catalog:
    """Parsed listing: stable records, then archived records, both in document order."""
    source: str = ""
    stable: Tuple[VersionRecord, ...] = ()
    archived: Tuple[VersionRecord, ...] = ()

    def stable_versions(self) -> List[VersionRecord]:
        return list(self.stable)

    def archived_versions(self) -> List[VersionRecord]:
        return list(self.archived)

    def all_versions(self) -> List[VersionRecord]:
        return list(self.stable) + list(self.archived)

    def find_version(self, name: str) -> Optional[VersionRecord]:
        name = (name or "").strip()
        if name.startswith("go"):
            name = name[2:]
        for v in self:
            if v.name == name:
                return v
        return None

    def is_empty(self) -> bool:
        return len(self) == 0

    def __iter__(self) -> Iterator[VersionRecord]:
        yield from self.stable
        yield from self.archived

    def __len__(self) -> int:
        return len(self.stable) + len(self.archived)
