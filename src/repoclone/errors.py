"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    TAB_ERROR = 5
    VALIDATION_ERROR = 7


@dataclass
class RepoCloneError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."


def tab_failure(tab: str, step: str, exc: Exception) -> RepoCloneError:
    """Describe a failed tab step as a TAB_ERROR; domain errors pass through unchanged."""
    if isinstance(exc, RepoCloneError):
        return exc
    return RepoCloneError(
        f"Tab '{tab}' failed to {step}: {exc}",
        code=ExitCode.TAB_ERROR,
        hint="Check the account connection and select the tab again.",
    )
