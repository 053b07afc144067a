"""
Narrow view over the download listing's HTML.

All knowledge of the page layout lives here: where a zone starts and ends,
which elements are version blocks, and how a package table is laid out.
The collector only talks to ListingDocument / Block / Table / Row.
"""

from __future__ import annotations
from typing import Iterator, List, Optional, Tuple, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

BLOCK_TAG = "div"
HEADER_ROW_CLASS = "first"

class Row:
    def __init__(self, tr: Tag) -> None:
        self._cells: List[Tag] = tr.find_all("td")

    def __len__(self) -> int:
        return len(self._cells)

    def cell(self, n: int) -> str:
        """Trimmed text of column n, or "" when the row is short."""
        if n >= len(self._cells):
            return ""
        return self._cells[n].get_text(strip=True)

    def link(self, n: int) -> Tuple[str, str]:
        """(anchor text, href) of the first link in column n."""
        if n >= len(self._cells):
            return "", ""
        a = self._cells[n].find("a")
        if a is None:
            return "", ""
        return a.get_text(strip=True), (a.get("href") or "").strip()

class Table:
    def __init__(self, table: Tag) -> None:
        self._table = table

    def header_labels(self) -> List[str]:
        head = self._table.find("thead") or self._table
        return [th.get_text(strip=True) for th in head.find_all("th")]

    def rows(self) -> Iterator[Row]:
        """Data rows; the header row and rows without cells are skipped."""
        for tr in self._table.find_all("tr"):
            if HEADER_ROW_CLASS in (tr.get("class") or []):
                continue
            row = Row(tr)
            if len(row):
                yield row

class Block:
    def __init__(self, block_id: str, element: Tag) -> None:
        self.id = block_id
        self._element = element

    def first_table(self) -> Optional[Table]:
        t = self._element.find("table")
        return Table(t) if t is not None else None

    def __repr__(self) -> str:
        return f"Block(id={self.id!r})"

def _as_block(el: Tag) -> Optional[Block]:
    if el.name != BLOCK_TAG:
        return None
    block_id = (el.get("id") or "").strip()
    if not block_id:
        return None
    return Block(block_id, el)

class ListingDocument:
    def __init__(self, html: Union[str, bytes]) -> None:
        # bytes are decoded by bs4 from the document's own charset
        self._soup = BeautifulSoup(html or b"", "html.parser")

    def has_anchor(self, anchor_id: str) -> bool:
        return self._soup.find(id=anchor_id) is not None

    def zone_after(self, start_id: str, stop_id: str) -> List[Block]:
        """Blocks among the siblings following #start_id, up to #stop_id."""
        start = self._soup.find(id=start_id)
        if start is None:
            return []
        out: List[Block] = []
        for sib in start.find_next_siblings():
            if sib.get("id") == stop_id:
                break
            b = _as_block(sib)
            if b is not None:
                out.append(b)
        return out

    def zone_within(self, zone_id: str, selector: str) -> List[Block]:
        """Blocks matching a CSS selector inside #zone_id."""
        zone = self._soup.find(id=zone_id)
        if zone is None:
            return []
        out: List[Block] = []
        for el in zone.select(selector):
            b = _as_block(el)
            if b is not None:
                out.append(b)
        return out
