from __future__ import annotations

import struct
from dataclasses import dataclass

from .constants import (
    LOCAL_FILE_HEADER_SIG,
    CENTRAL_DIR_SIG,
    END_OF_CENTRAL_DIR_SIG,
    ZIP_VERSION,
    METHOD_STORED,
    FLAG_NONE,
    DOS_TIME_ZERO,
    DOS_DATE_ZERO,
    MAX_ENTRIES,
    MAX_NAME_BYTES,
    MAX_U32,
)
from .errors import ArchiveLimitError


# Local file header (fixed 30 bytes), followed by name bytes
# struct: <I H H H H H I I I H H
#  - signature u32
#  - version_needed u16
#  - flags u16
#  - method u16
#  - mod_time u16, mod_date u16
#  - crc32 u32
#  - compressed_size u32, uncompressed_size u32
#  - name_len u16, extra_len u16
_LOCAL_HDR_STRUCT = struct.Struct("<IHHHHHIIIHH")

# Central directory entry (fixed 46 bytes), followed by name bytes
# struct: <I H H H H H H I I I H H H H H I I
#  - signature u32
#  - version_made_by u16, version_needed u16
#  - flags u16, method u16, mod_time u16, mod_date u16
#  - crc32 u32, compressed_size u32, uncompressed_size u32
#  - name_len u16, extra_len u16, comment_len u16
#  - disk_start u16, internal_attrs u16, external_attrs u32
#  - local_header_offset u32
_CENTRAL_DIR_STRUCT = struct.Struct("<IHHHHHHIIIHHHHHII")

# End of central directory (fixed 22 bytes, no comment)
# struct: <I H H H H I I H
#  - signature u32
#  - this_disk u16, cd_start_disk u16
#  - entries_this_disk u16, entries_total u16
#  - cd_size u32, cd_offset u32
#  - comment_len u16
_EOCD_STRUCT = struct.Struct("<IHHHHIIH")


def _check_u32(value: int, what: str) -> None:
    if value < 0 or value > MAX_U32:
        raise ArchiveLimitError(f"{what} {value} does not fit in a 32-bit field (ZIP64 is not supported)")


def _check_name(name_bytes: bytes) -> None:
    if len(name_bytes) > MAX_NAME_BYTES:
        raise ArchiveLimitError(f"Entry name is {len(name_bytes)} bytes; limit is {MAX_NAME_BYTES}")


@dataclass
class LocalFileHeader:
    crc32: int
    size: int
    name_bytes: bytes

    def pack(self) -> bytes:
        _check_name(self.name_bytes)
        _check_u32(self.size, "Entry size")
        return _LOCAL_HDR_STRUCT.pack(
            LOCAL_FILE_HEADER_SIG,
            ZIP_VERSION,
            FLAG_NONE,
            METHOD_STORED,
            DOS_TIME_ZERO,
            DOS_DATE_ZERO,
            self.crc32,
            self.size,  # compressed == uncompressed for stored entries
            self.size,
            len(self.name_bytes),
            0,  # extra_len
        ) + self.name_bytes


@dataclass
class CentralDirectoryEntry:
    crc32: int
    size: int
    name_bytes: bytes
    local_header_offset: int

    def pack(self) -> bytes:
        _check_name(self.name_bytes)
        _check_u32(self.size, "Entry size")
        _check_u32(self.local_header_offset, "Local header offset")
        return _CENTRAL_DIR_STRUCT.pack(
            CENTRAL_DIR_SIG,
            ZIP_VERSION,
            ZIP_VERSION,
            FLAG_NONE,
            METHOD_STORED,
            DOS_TIME_ZERO,
            DOS_DATE_ZERO,
            self.crc32,
            self.size,
            self.size,
            len(self.name_bytes),
            0,  # extra_len
            0,  # comment_len
            0,  # disk_start
            0,  # internal_attrs
            0,  # external_attrs
            self.local_header_offset,
        ) + self.name_bytes


@dataclass
class EndOfCentralDirectory:
    entry_count: int
    central_dir_size: int
    central_dir_offset: int

    def pack(self) -> bytes:
        if self.entry_count < 0 or self.entry_count > MAX_ENTRIES:
            raise ArchiveLimitError(f"Archive has {self.entry_count} entries; limit is {MAX_ENTRIES}")
        _check_u32(self.central_dir_size, "Central directory size")
        _check_u32(self.central_dir_offset, "Central directory offset")
        return _EOCD_STRUCT.pack(
            END_OF_CENTRAL_DIR_SIG,
            0,  # this_disk
            0,  # cd_start_disk
            self.entry_count,
            self.entry_count,
            self.central_dir_size,
            self.central_dir_offset,
            0,  # comment_len
        )
