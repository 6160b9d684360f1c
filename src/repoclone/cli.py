"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import logging as py_logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import cast

from .clone.models import CloneRequest
from .clone.service import LocalCloneService
from .config import load_config
from .connections import StaticConnectionManager
from .errors import ExitCode, RepoCloneError, user_facing_error
from .logging import configure_logging, default_log_path
from .ui.clone_dialog import CloneCoordinator
from .ui.tabs import RepositoryTab, TabKind, UrlTab

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repoclone",
        description="Resolve where a repository would be cloned and whether cloning is allowed.",
    )
    parser.add_argument("--url", required=True, help="Repository clone URL (HTTPS or SSH)")
    parser.add_argument("--path", default=None, help="Destination path; inferred when omitted")
    parser.add_argument(
        "--account",
        action="append",
        default=None,
        help="Authenticated host address; repeat for a second account",
    )
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--json", action="store_true", help="Print the clone request as JSON")
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def build_coordinator(
    namespace: argparse.Namespace,
    *,
    default_root: str = "",
    accounts: Sequence[str] = (),
) -> CloneCoordinator:
    return CloneCoordinator(
        StaticConnectionManager(namespace.account or accounts),
        LocalCloneService(default_root or None),
        RepositoryTab(),
        RepositoryTab(),
        UrlTab(),
    )


async def resolve_clone_request(coordinator: CloneCoordinator, url: str, path: str | None) -> CloneRequest:
    await coordinator.initialize()
    await coordinator.select_tab(coordinator.available_tabs.index(TabKind.URL))

    url_tab: UrlTab = coordinator.url_tab  # type: ignore[assignment]
    if url_tab.set_url(url) is None:
        raise RepoCloneError(
            f"Unrecognized repository URL: {url}",
            code=ExitCode.VALIDATION_ERROR,
            hint="Use https://host/owner/name or git@host:owner/name.",
        )
    if path is not None:
        coordinator.path = path

    if not coordinator.clone_command.can_execute():
        raise RepoCloneError(
            coordinator.path_error or "Clone is not available.",
            code=ExitCode.VALIDATION_ERROR,
            hint=f"Choose a different destination than {coordinator.path}.",
        )
    return cast(CloneRequest, coordinator.clone_command.execute())


def format_request(request: CloneRequest) -> str:
    source = request.repository.clone_url or request.repository.full_name
    return f"{source} -> {request.destination}"


def main(argv: Sequence[str] | None = None) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    config = load_config(namespace.config)
    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level or config.log_level, log_file=log_path)

    coordinator: CloneCoordinator | None = None
    try:
        coordinator = build_coordinator(
            namespace,
            default_root=config.default_clone_root,
            accounts=config.accounts,
        )
        logger.debug("Resolving clone request")
        request = asyncio.run(resolve_clone_request(coordinator, namespace.url, namespace.path))
        if namespace.json:
            print(request.model_dump_json())
        else:
            print(format_request(request))
        return int(ExitCode.SUCCESS)
    except RepoCloneError as exc:
        logger.error(
            "Handled RepoCloneError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        print(
            user_facing_error("Unexpected runtime failure", hint=f"Inspect logs: {log_path}"),
            file=sys.stderr,
        )
        return int(ExitCode.RUNTIME_ERROR)
    finally:
        if coordinator is not None:
            coordinator.close()


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
