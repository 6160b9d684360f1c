"""Destination path inference for repository selection changes."""

from __future__ import annotations

import os

from repoclone.clone.models import Repository

AutoSuffix = tuple[str, str]


def suffix_for(repository: Repository) -> AutoSuffix:
    return (repository.owner, repository.name)


def _join_suffix(suffix: AutoSuffix, sep: str) -> str:
    owner, name = suffix
    return f"{owner}{sep}{name}"


def _strip_suffix(path: str, suffix: AutoSuffix, sep: str) -> str | None:
    """Return ``path`` without the trailing ``owner/name`` segments, or None if absent."""
    tail = _join_suffix(suffix, sep)
    if path == tail:
        return ""
    if path.endswith(sep + tail):
        return path[: len(path) - len(tail)]
    return None


def _append(path: str, tail: str, sep: str) -> str:
    if not path:
        return tail
    if path.endswith(sep):
        return path + tail
    return f"{path}{sep}{tail}"


def infer_clone_path(
    current_path: str,
    last_suffix: AutoSuffix | None,
    repository: Repository | None,
    *,
    sep: str = os.sep,
) -> tuple[str, AutoSuffix | None]:
    """Compute the destination path after a repository selection change.

    The previously auto-appended ``owner/name`` suffix is replaced when the path
    still ends with it; otherwise the new suffix is appended so segments the
    user typed are kept. A missing repository leaves both values unchanged.
    """
    if repository is None:
        return current_path, last_suffix

    new_suffix = suffix_for(repository)
    tail = _join_suffix(new_suffix, sep)
    if last_suffix is not None:
        base = _strip_suffix(current_path, last_suffix, sep)
        if base is not None:
            return base + tail, new_suffix
    return _append(current_path, tail, sep), new_suffix
