from __future__ import annotations
import hashlib, urllib.parse
from typing import BinaryIO, Callable

READ_CHUNK = 1024 * 1024

def url_leaf_name(u: str) -> str:
    return urllib.parse.unquote((u or "").split("?")[0].split("/")[-1])

def stream_digest(f: BinaryIO, factory: Callable[[], "hashlib._Hash"]) -> str:
    h = factory()
    for chunk in iter(lambda: f.read(READ_CHUNK), b""):
        h.update(chunk)
    return h.hexdigest()
