from __future__ import annotations

import re

from .errors import UnsafePathError


PATH_POLICY_ALLOW = "allow"
PATH_POLICY_REJECT = "reject"
PATH_POLICY_NORMALIZE = "normalize"

PATH_POLICIES = (PATH_POLICY_ALLOW, PATH_POLICY_REJECT, PATH_POLICY_NORMALIZE)

_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")


def norm_path(p: str) -> str:
    """Normalize archive paths to a canonical forward-slash form.

    Rules:
    - Convert backslashes to slashes
    - Strip a drive prefix (``C:\\`` or ``C:/``)
    - Strip leading/trailing slashes
    - Remove empty and '.' segments
    - Reject '..' segments, NUL, and names that normalize to nothing
    """
    if "\x00" in p:
        raise UnsafePathError("Path may not contain NUL")
    p = _DRIVE_RE.sub("", p.replace("\\", "/")).strip("/")
    parts = [q for q in p.split("/") if q not in ("", ".")]
    for q in parts:
        if q == "..":
            raise UnsafePathError("Path may not contain '..'")
    if not parts:
        raise UnsafePathError("Path is empty after normalization")
    return "/".join(parts)


def is_safe_path(p: str) -> bool:
    """True when a naive extractor could not be steered outside its target directory."""
    if not p or "\x00" in p:
        return False
    if p[0] in "/\\" or _DRIVE_RE.match(p):
        return False
    return ".." not in re.split(r"[/\\]", p)


def apply_path_policy(p: str, policy: str = PATH_POLICY_REJECT) -> str:
    if policy == PATH_POLICY_ALLOW:
        return p
    if policy == PATH_POLICY_NORMALIZE:
        return norm_path(p)
    if policy == PATH_POLICY_REJECT:
        if not is_safe_path(p):
            raise UnsafePathError(f"Unsafe archive path: {p!r}")
        return p
    raise ValueError(f"Unknown path policy: {policy!r}")
