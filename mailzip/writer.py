from __future__ import annotations

import codecs
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from .constants import (
    DEFAULT_ENCODING,
    LOCAL_FILE_HEADER_SIZE,
    MAX_ENTRIES,
    ZIP_CONTENT_TYPE,
)
from .checksum import crc32
from .fsutil import atomic_write
from .errors import ArchiveLimitError, EncodingError, InputError, UnsafePathError
from .pathutil import PATH_POLICIES, PATH_POLICY_REJECT, apply_path_policy
from .records import CentralDirectoryEntry, EndOfCentralDirectory, LocalFileHeader


@dataclass(frozen=True)
class ArchiveEntry:
    name: str
    content: str


@dataclass
class EncodedFile:
    name_bytes: bytes
    content_bytes: bytes
    crc32: int
    local_header_offset: int


@dataclass
class ArchiveBlob:
    """Finished archive bytes plus the metadata a file-save operation needs."""

    data: bytes
    content_type: str = ZIP_CONTENT_TYPE
    filename: Optional[str] = None

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def save(self, path: Union[str, os.PathLike]) -> Path:
        return atomic_write(path, self.data)


EntryLike = Union[ArchiveEntry, Mapping, tuple, list]


def coerce_entry(item: Any, index: int) -> ArchiveEntry:
    """Turn one caller-supplied item into an ArchiveEntry.

    Accepted shapes:
    - ArchiveEntry
    - (name, content) pair
    - mapping with ``name``/``content`` or ``fileName``/``content`` keys
    """
    if isinstance(item, ArchiveEntry):
        name, content = item.name, item.content
    elif isinstance(item, Mapping):
        name = item.get("name", item.get("fileName"))
        content = item.get("content")
    elif isinstance(item, (tuple, list)) and len(item) == 2:
        name, content = item
    else:
        raise InputError(f"unsupported entry type {type(item).__name__}", index)
    if name is None or name == "":
        raise InputError("missing name", index)
    if not isinstance(name, str):
        raise InputError(f"name must be str, not {type(name).__name__}", index)
    if content is None:
        raise InputError(f"missing content for {name!r}", index)
    if not isinstance(content, str):
        raise InputError(f"content for {name!r} must be str, not {type(content).__name__}", index)
    return ArchiveEntry(name=name, content=content)


class ArchiveBuilder:
    """Builds stored (uncompressed) ZIP archives from named text payloads.

    A builder holds configuration only, so one instance can be shared freely.
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING, path_policy: str = PATH_POLICY_REJECT):
        if path_policy not in PATH_POLICIES:
            raise ValueError(f"Unknown path policy: {path_policy!r}")
        codecs.lookup(encoding)  # LookupError for unknown encodings
        self.encoding = encoding
        self.path_policy = path_policy

    def encode(self, entries: Iterable[EntryLike]) -> List[EncodedFile]:
        """
        Validates and encodes every entry, assigning local header offsets.

        Each entry's offset is the sum of (local header + content) sizes of all
        entries before it, so entries are processed strictly in input order.

        Raises:
            InputError: an entry is malformed or its name violates the path policy.
            EncodingError: a name or payload cannot be encoded.
            ArchiveLimitError: too many entries for the classic record layout.
        """
        items = list(entries)
        if len(items) > MAX_ENTRIES:
            raise ArchiveLimitError(f"Archive has {len(items)} entries; limit is {MAX_ENTRIES}")
        files: List[EncodedFile] = []
        offset = 0
        for index, item in enumerate(items):
            entry = coerce_entry(item, index)
            try:
                name = apply_path_policy(entry.name, self.path_policy)
            except UnsafePathError as exc:
                raise UnsafePathError(str(exc), index) from exc
            try:
                name_bytes = name.encode(self.encoding)
                content_bytes = entry.content.encode(self.encoding)
            except UnicodeError as exc:
                raise EncodingError(index, entry.name, self.encoding, str(exc)) from exc
            files.append(
                EncodedFile(
                    name_bytes=name_bytes,
                    content_bytes=content_bytes,
                    crc32=crc32(content_bytes),
                    local_header_offset=offset,
                )
            )
            offset += LOCAL_FILE_HEADER_SIZE + len(name_bytes) + len(content_bytes)
        return files

    def build(self, entries: Iterable[EntryLike]) -> bytes:
        files = self.encode(entries)

        out = bytearray()
        for ef in files:
            out += LocalFileHeader(crc32=ef.crc32, size=len(ef.content_bytes), name_bytes=ef.name_bytes).pack()
            out += ef.content_bytes
        central_dir_offset = len(out)

        for ef in files:
            out += CentralDirectoryEntry(
                crc32=ef.crc32,
                size=len(ef.content_bytes),
                name_bytes=ef.name_bytes,
                local_header_offset=ef.local_header_offset,
            ).pack()
        central_dir_size = len(out) - central_dir_offset

        out += EndOfCentralDirectory(
            entry_count=len(files),
            central_dir_size=central_dir_size,
            central_dir_offset=central_dir_offset,
        ).pack()
        return bytes(out)

    def build_blob(self, entries: Iterable[EntryLike], filename: Optional[str] = None) -> ArchiveBlob:
        return ArchiveBlob(data=self.build(entries), filename=filename)


def build_archive(entries: Iterable[EntryLike], **kwargs) -> bytes:
    """Build a complete ZIP archive; kwargs are passed to ArchiveBuilder."""
    return ArchiveBuilder(**kwargs).build(entries)


def build_archive_blob(entries: Iterable[EntryLike], filename: Optional[str] = None, **kwargs) -> ArchiveBlob:
    return ArchiveBuilder(**kwargs).build_blob(entries, filename=filename)
