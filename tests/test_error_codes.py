from __future__ import annotations

from repoclone.errors import ExitCode, RepoCloneError, tab_failure, user_facing_error
from repoclone.logging import LOG_LEVELS, configure_logging


def test_exit_codes_are_deterministic() -> None:
    assert int(ExitCode.SUCCESS) == 0
    assert int(ExitCode.INVALID_ARGS) == 2
    assert int(ExitCode.TAB_ERROR) == 5
    assert int(ExitCode.VALIDATION_ERROR) == 7


def test_repo_clone_error_string_contains_hint() -> None:
    err = RepoCloneError("Tab not ready", code=ExitCode.TAB_ERROR, hint="Initialize first")
    assert "Initialize first" in str(err)
    assert str(RepoCloneError("plain")) == "plain"


def test_user_facing_error_template() -> None:
    text = user_facing_error("Destination exists", hint="Pick another folder")
    assert text.startswith("Error:")
    assert "Next step" in text
    assert user_facing_error("Destination exists") == "Error: Destination exists."


def test_logging_levels() -> None:
    logger = configure_logging("WARN")
    assert logger.level == LOG_LEVELS["WARN"]


def test_tab_failure_wraps_collaborator_errors() -> None:
    err = tab_failure("secondary", "activate", RuntimeError("listing failed"))
    assert err.code == ExitCode.TAB_ERROR
    assert "secondary" in err.message
    assert "listing failed" in err.message


def test_tab_failure_keeps_domain_errors() -> None:
    original = RepoCloneError("revoked", code=ExitCode.VALIDATION_ERROR)
    assert tab_failure("primary", "initialize", original) is original
