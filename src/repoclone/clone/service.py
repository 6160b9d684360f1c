"""Clone destination services."""

from __future__ import annotations

import logging as py_logging
from pathlib import Path
from typing import Protocol

logger = py_logging.getLogger(__name__)

DESTINATION_ALREADY_EXISTS = "The destination already exists."
DEFAULT_CLONE_ROOT = Path("~/source/repos")


class CloneService(Protocol):
    def default_clone_path(self) -> str: ...

    def destination_exists(self, path: str) -> bool: ...


class LocalCloneService:
    """CloneService backed by the local filesystem."""

    def __init__(self, default_root: str | Path | None = None) -> None:
        root = Path(default_root) if default_root else DEFAULT_CLONE_ROOT
        try:
            root = root.expanduser()
        except RuntimeError:
            logger.debug("Home directory unavailable; keeping clone root=%s", root)
        self._default_root = root

    def default_clone_path(self) -> str:
        return str(self._default_root)

    def destination_exists(self, path: str) -> bool:
        value = path.strip()
        if not value:
            return False
        try:
            candidate = Path(value).expanduser()
        except RuntimeError:
            candidate = Path(value)
        return candidate.exists()
