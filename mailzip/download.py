from __future__ import annotations

import base64
import datetime as _dt
import os
from pathlib import Path
from typing import Iterable, Optional, Union

from .constants import DEFAULT_ARCHIVE_PREFIX, DEFAULT_ENCODING, EML_CONTENT_TYPE
from .fsutil import atomic_write
from .writer import ArchiveBuilder, EntryLike


PathLike = Union[str, os.PathLike]


def default_archive_name(today: Optional[_dt.date] = None) -> str:
    """Name used when the caller does not pick one, e.g. ``emails_2024-05-01.zip``."""
    if today is None:
        today = _dt.datetime.now(_dt.timezone.utc).date()
    return f"{DEFAULT_ARCHIVE_PREFIX}_{today.isoformat()}.zip"


def to_base64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def to_data_url(data: bytes, content_type: str = EML_CONTENT_TYPE) -> str:
    return f"data:{content_type};base64,{to_base64(data)}"


def eml_data_url(content: str, encoding: str = DEFAULT_ENCODING) -> str:
    """Data URL for a single message, for callers that download one email without zipping."""
    return to_data_url(content.encode(encoding))


def save_archive(
    entries: Iterable[EntryLike],
    out_path: Optional[PathLike] = None,
    directory: PathLike = ".",
    **kwargs,
) -> Path:
    """Build an archive and write it to disk.

    Args:
        entries: Items accepted by ArchiveBuilder.build.
        out_path: Destination file. Defaults to default_archive_name() in ``directory``.
        directory: Used only when ``out_path`` is not given.
        **kwargs: Passed to ArchiveBuilder (``encoding``, ``path_policy``).

    Returns:
        The path written. The archive is fully built before the file is touched,
        so a failed build leaves nothing behind.
    """
    data = ArchiveBuilder(**kwargs).build(entries)
    target = Path(out_path) if out_path is not None else Path(directory) / default_archive_name()
    return atomic_write(target, data)


def save_eml(content: str, out_path: PathLike, encoding: str = DEFAULT_ENCODING) -> Path:
    return atomic_write(out_path, content.encode(encoding))
