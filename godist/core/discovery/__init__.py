# godist/core/discovery/__init__.py

from .collector import (
    Collector,
    fetch_catalog,
    fetch_document,
    parse_catalog,
    PACKAGE_LEAD,
)
from .document import ListingDocument

__all__ = [
    "Collector",
    "fetch_catalog",
    "fetch_document",
    "parse_catalog",
    "PACKAGE_LEAD",
    "ListingDocument",
]
