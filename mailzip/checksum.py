"""
CRC-32 (ISO-HDLC, as used by ZIP/PNG/gzip) with a lazily built table.
Pure Python so the archive layout never depends on a platform zlib.
"""

import threading
from typing import Optional, Tuple

_POLY = 0xEDB88320

_TABLE: Optional[Tuple[int, ...]] = None
_TABLE_LOCK = threading.Lock()


def _make_table():
    tbl = []
    for n in range(256):
        c = n
        for _ in range(8):
            if c & 1:
                c = (c >> 1) ^ _POLY
            else:
                c >>= 1
        tbl.append(c & 0xFFFFFFFF)
    return tuple(tbl)


def get_table() -> Tuple[int, ...]:
    """Return the shared 256-entry lookup table, building it on first use."""
    global _TABLE
    tbl = _TABLE
    if tbl is None:
        with _TABLE_LOCK:
            if _TABLE is None:
                _TABLE = _make_table()
            tbl = _TABLE
    return tbl


def crc32(data: bytes, crc: int = 0) -> int:
    tbl = get_table()
    c = (~crc) & 0xFFFFFFFF
    for b in data:
        c = tbl[(c ^ b) & 0xFF] ^ (c >> 8)
    return (~c) & 0xFFFFFFFF
