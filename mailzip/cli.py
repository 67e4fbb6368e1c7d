from __future__ import annotations

import os
import sys
import time
import argparse
from pathlib import Path
from typing import List, Iterable, Optional, Tuple

from mailzip.constants import DEFAULT_ENCODING, EML_CONTENT_TYPE
from mailzip.checksum import crc32
from mailzip.download import default_archive_name, save_archive, to_data_url
from mailzip.errors import MailzipError
from mailzip.pathutil import PATH_POLICIES, PATH_POLICY_REJECT
from mailzip.writer import ArchiveEntry


def _iter_inputs(inputs: Iterable[str], exclude: Optional[Path] = None) -> Iterable[Tuple[str, str]]:
    """Yield (archive name, filesystem path) pairs for files and directories.

    Directory members are named relative to the directory and visited in sorted
    order so the archive layout is reproducible. Plain files keep their base name.
    A file resolving to ``exclude`` (the archive being written) is skipped.
    """
    for p in inputs:
        if os.path.isdir(p):
            base = Path(p)
            for root, dirs, files in os.walk(p):
                dirs.sort()
                for fn in sorted(files):
                    full = Path(root) / fn
                    if exclude is not None and full.resolve() == exclude:
                        continue
                    yield full.relative_to(base).as_posix(), str(full)
        elif os.path.isfile(p):
            if exclude is not None and Path(p).resolve() == exclude:
                continue
            yield os.path.basename(p), p
        else:
            raise FileNotFoundError(f"No such file or directory: {p}")


def _read_entries(inputs: Iterable[str], encoding: str, exclude: Optional[Path] = None) -> List[ArchiveEntry]:
    entries = []
    for arc, full in _iter_inputs(inputs, exclude=exclude):
        with open(full, "r", encoding=encoding, newline="") as f:
            entries.append(ArchiveEntry(name=arc, content=f.read()))
    return entries


def cmd_pack(
    output: str,
    inputs: List[str],
    *,
    encoding: str = DEFAULT_ENCODING,
    path_policy: str = PATH_POLICY_REJECT,
    quiet: bool = False,
) -> Path:
    """Pack text files into a stored ZIP archive.

    Args:
        output: Destination .zip path, or an existing directory to receive a
            default-named archive (emails_YYYY-MM-DD.zip).
        inputs: Files and/or directories to pack.
        encoding: Encoding used to read inputs and to encode names and payloads.
        path_policy: One of "allow", "reject", "normalize".
        quiet: Limit output to the summary line.
    """
    t0 = time.time()
    if os.path.isdir(output):
        target = Path(output) / default_archive_name()
    else:
        target = Path(output)
    entries = _read_entries(inputs, encoding, exclude=target.resolve())
    if not quiet:
        for e in entries:
            print(f"  packing: {e.name}")
    written = save_archive(entries, out_path=target, encoding=encoding, path_policy=path_policy)
    dt = max(0.000001, time.time() - t0)
    kib = written.stat().st_size / 1024.0
    print(f"Done: {len(entries)} file(s); {kib:.1f} KiB in {dt:.2f}s -> {written}")
    return written


def cmd_crc(paths: List[str]) -> bool:
    """Print the CRC-32 of each file as 8 hex digits followed by the path."""
    for p in paths:
        with open(p, "rb") as f:
            value = crc32(f.read())
        print(f"{value:08x}\t{p}")
    return True


def cmd_data_url(path: str, *, content_type: str = EML_CONTENT_TYPE) -> str:
    with open(path, "rb") as f:
        url = to_data_url(f.read(), content_type=content_type)
    print(url)
    return url


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="mailzip",
        description="Pack text documents (e.g. .eml messages) into a stored ZIP archive",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_pack = sub.add_parser("pack", help="Pack files into a ZIP archive")
    ap_pack.add_argument("output", help="Output .zip path or directory")
    ap_pack.add_argument("inputs", nargs="+", help="Input files/directories")
    ap_pack.add_argument("--encoding", default=DEFAULT_ENCODING, help="Text encoding (default utf-8)")
    ap_pack.add_argument(
        "--path-policy",
        choices=list(PATH_POLICIES),
        default=PATH_POLICY_REJECT,
        help=(
            "How entry names are checked: allow (store as given), reject (refuse '..', absolute "
            "and drive paths), normalize (canonical forward-slash form). Default: reject"
        ),
    )
    ap_pack.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    ap_crc = sub.add_parser("crc", help="Print CRC-32 of files")
    ap_crc.add_argument("paths", nargs="+", help="Files to checksum")

    ap_url = sub.add_parser("data-url", help="Print a base64 data URL for a file")
    ap_url.add_argument("path", help="File to encode")
    ap_url.add_argument("--content-type", default=EML_CONTENT_TYPE, help="Media type of the data URL")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "pack":
            cmd_pack(args.output, args.inputs, encoding=args.encoding, path_policy=args.path_policy, quiet=args.quiet)
        elif args.cmd == "crc":
            cmd_crc(args.paths)
        elif args.cmd == "data-url":
            cmd_data_url(args.path, content_type=args.content_type)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (MailzipError, OSError, ValueError, LookupError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
