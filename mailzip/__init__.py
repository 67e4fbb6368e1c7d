"""
mailzip: packs in-memory text documents into a single ZIP archive.

Features:

- Stored (uncompressed) ZIP writer: local headers, central directory, EOCD record.
- Pure-Python CRC-32 with a lazily built, lock-guarded lookup table.
- Configurable entry-name policy (allow / reject unsafe paths / normalize).
- Helpers to save archives atomically and to produce base64 data URLs.
- CLI for packing .eml files, checksumming, and data-URL generation.

Only writing is supported; any standard unarchiving tool reads the result.
"""

from .checksum import crc32
from .writer import ArchiveBuilder, ArchiveBlob, ArchiveEntry, build_archive, build_archive_blob

__version__ = "0.1"

__all__ = [
    "constants",
    "checksum",
    "crc32",
    "errors",
    "writer",
    "download",
    "ArchiveBuilder",
    "ArchiveBlob",
    "ArchiveEntry",
    "build_archive",
    "build_archive_blob",
]
