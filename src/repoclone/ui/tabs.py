"""Repository selection tabs and their lifecycle state machine."""

from __future__ import annotations

import logging as py_logging
import re
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Protocol

from repoclone.clone.models import Account, Repository
from repoclone.errors import ExitCode, RepoCloneError

logger = py_logging.getLogger(__name__)

HTTPS_REPO_PATTERN: re.Pattern[str] = re.compile(
    r"^https?://([^/\s]+)/([^/\s]+)/([^/\s]+?)(?:\.git)?/?$",
    re.IGNORECASE,
)
SSH_REPO_PATTERN: re.Pattern[str] = re.compile(
    r"^(?:ssh://)?git@([^:/\s]+)[:/]([^/\s]+)/([^/\s]+?)(?:\.git)?/?$",
    re.IGNORECASE,
)


class TabKind(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    URL = "url"


class TabState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    ACTIVATED = "activated"


class TabEvent(str, Enum):
    INITIALIZE = "initialize"
    SELECT = "select"


_TRANSITIONS: dict[tuple[TabState, TabEvent], TabState] = {
    (TabState.UNINITIALIZED, TabEvent.INITIALIZE): TabState.INITIALIZED,
    (TabState.INITIALIZED, TabEvent.SELECT): TabState.ACTIVATED,
    (TabState.ACTIVATED, TabEvent.SELECT): TabState.ACTIVATED,
}


def next_tab_state(state: TabState, event: TabEvent) -> TabState:
    """Return the state a tab moves to on ``event``; reject transitions outside the table."""
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise RepoCloneError(
            f"Tab cannot {event.value} while {state.value}.",
            code=ExitCode.TAB_ERROR,
            hint="Tabs are initialized once and must be initialized before selection.",
        ) from None


RepositoryListener = Callable[[Repository | None], None]
RepositoryLoader = Callable[[Account], Awaitable[list[Repository]]]


class DialogTab(Protocol):
    @property
    def repository(self) -> Repository | None: ...

    def subscribe(self, listener: RepositoryListener) -> Callable[[], None]: ...

    async def activate(self) -> None: ...

    def close(self) -> None: ...


class AccountTab(DialogTab, Protocol):
    async def initialize(self, account: Account | None) -> None: ...


class RepositorySource:
    """Holds a selected repository and notifies subscribers when it changes."""

    def __init__(self) -> None:
        self._repository: Repository | None = None
        self._listeners: list[RepositoryListener] = []

    @property
    def repository(self) -> Repository | None:
        return self._repository

    def subscribe(self, listener: RepositoryListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_repository(self, repository: Repository | None) -> None:
        if repository == self._repository:
            return
        self._repository = repository
        for listener in list(self._listeners):
            listener(repository)

    def close(self) -> None:
        self._listeners.clear()


class RepositoryTab(RepositorySource):
    """Account-bound tab that lists repositories once activated."""

    def __init__(self, loader: RepositoryLoader | None = None) -> None:
        super().__init__()
        self._loader = loader
        self.account: Account | None = None
        self.repositories: list[Repository] = []
        self.is_enabled = False

    async def initialize(self, account: Account | None) -> None:
        self.account = account
        self.is_enabled = account is not None
        logger.debug("Repository tab bound account=%s", account)

    async def activate(self) -> None:
        if self.account is None:
            raise RepoCloneError(
                "Repository tab has no account.",
                code=ExitCode.TAB_ERROR,
                hint="Initialize the tab with an account before activating it.",
            )
        if self._loader is None:
            self.repositories = []
            return
        loaded = await self._loader(self.account)
        self.repositories = sorted(loaded, key=lambda item: item.full_name.lower())
        logger.debug("Loaded %s repositories account=%s", len(self.repositories), self.account)

    def select(self, repository: Repository | None) -> None:
        if repository is not None and repository not in self.repositories:
            raise RepoCloneError(
                f"Repository is not available: {repository.full_name}",
                code=ExitCode.VALIDATION_ERROR,
                hint="Choose one of the listed repositories.",
            )
        self.set_repository(repository)


def parse_repository_url(url: str) -> Repository | None:
    """Extract owner/name from an HTTPS or SSH clone URL on any host."""
    value = url.strip()
    if not value:
        return None
    match = HTTPS_REPO_PATTERN.match(value) or SSH_REPO_PATTERN.match(value)
    if match is None:
        return None
    _host, owner, name = match.groups()
    return Repository(owner=owner, name=name, clone_url=value)


class UrlTab(RepositorySource):
    """Tab that takes a repository from a raw clone URL."""

    def __init__(self) -> None:
        super().__init__()
        self.url = ""

    async def activate(self) -> None:
        return None

    def set_url(self, url: str) -> Repository | None:
        self.url = url.strip()
        repository = parse_repository_url(self.url)
        if self.url and repository is None:
            logger.debug("Clone URL not recognized length=%s", len(self.url))
        self.set_repository(repository)
        return repository
