"""Clone dialog coordination: tab activation, destination inference and clone gating."""

from __future__ import annotations

import asyncio
import logging as py_logging
from collections.abc import Callable
from functools import partial

from repoclone.clone.models import Account, CloneRequest, Repository
from repoclone.clone.paths import AutoSuffix, infer_clone_path
from repoclone.clone.service import DESTINATION_ALREADY_EXISTS, CloneService
from repoclone.connections import ConnectionManager
from repoclone.errors import ExitCode, RepoCloneError, tab_failure
from repoclone.ui.tabs import (
    AccountTab,
    DialogTab,
    TabEvent,
    TabKind,
    TabState,
    UrlTab,
    next_tab_state,
)

logger = py_logging.getLogger(__name__)

CloneHandler = Callable[[CloneRequest], object]
CanExecuteListener = Callable[[bool], None]

_ACCOUNT_TABS = (TabKind.PRIMARY, TabKind.SECONDARY)


class CloneCommand:
    """Clone action whose enablement is driven by the coordinator."""

    def __init__(
        self,
        request_factory: Callable[[], CloneRequest],
        handler: CloneHandler | None = None,
    ) -> None:
        self._request_factory = request_factory
        self._handler = handler
        self._can_execute = False
        self._listeners: list[CanExecuteListener] = []

    def can_execute(self) -> bool:
        return self._can_execute

    def subscribe(self, listener: CanExecuteListener) -> None:
        self._listeners.append(listener)

    def update(self, value: bool) -> None:
        if value == self._can_execute:
            return
        self._can_execute = value
        for listener in list(self._listeners):
            listener(value)

    def execute(self) -> object:
        if not self._can_execute:
            raise RepoCloneError(
                "Clone is not available.",
                code=ExitCode.VALIDATION_ERROR,
                hint="Select a repository and a destination that does not exist.",
            )
        request = self._request_factory()
        logger.info(
            "Clone requested repository=%s destination=%s",
            request.repository.full_name,
            request.destination,
        )
        if self._handler is None:
            return request
        return self._handler(request)


class CloneCoordinator:
    def __init__(
        self,
        connection_manager: ConnectionManager,
        service: CloneService,
        primary_tab: AccountTab,
        secondary_tab: AccountTab,
        url_tab: UrlTab | DialogTab,
        *,
        clone_handler: CloneHandler | None = None,
    ) -> None:
        self._connection_manager = connection_manager
        self._service = service
        self._tabs: dict[TabKind, DialogTab] = {
            TabKind.PRIMARY: primary_tab,
            TabKind.SECONDARY: secondary_tab,
            TabKind.URL: url_tab,
        }
        self._states: dict[TabKind, TabState] = {
            TabKind.PRIMARY: TabState.UNINITIALIZED,
            TabKind.SECONDARY: TabState.UNINITIALIZED,
            TabKind.URL: TabState.INITIALIZED,
        }
        self._accounts: dict[TabKind, Account] = {}
        self._available: list[TabKind] = [TabKind.URL]
        self._selected_index = 0
        self._pending: dict[TabKind, asyncio.Task[None]] = {}
        self._initialized = False

        self._path = service.default_clone_path()
        self._last_suffix: AutoSuffix | None = None
        self._path_error: str | None = None

        self.clone_command = CloneCommand(self._build_request, clone_handler)
        self._unsubscribers = [
            tab.subscribe(partial(self._on_repository_changed, kind))
            for kind, tab in self._tabs.items()
        ]
        self._validate_path()

    @property
    def primary_tab(self) -> AccountTab:
        return self._tabs[TabKind.PRIMARY]  # type: ignore[return-value]

    @property
    def secondary_tab(self) -> AccountTab:
        return self._tabs[TabKind.SECONDARY]  # type: ignore[return-value]

    @property
    def url_tab(self) -> DialogTab:
        return self._tabs[TabKind.URL]

    @property
    def available_tabs(self) -> list[TabKind]:
        return list(self._available)

    @property
    def selected_tab_index(self) -> int:
        return self._selected_index

    @property
    def selected_tab(self) -> TabKind:
        return self._available[self._selected_index]

    def tab_state(self, kind: TabKind) -> TabState:
        return self._states[kind]

    def account_for(self, kind: TabKind) -> Account | None:
        return self._accounts.get(kind)

    @property
    def path(self) -> str:
        return self._path

    @path.setter
    def path(self, value: str) -> None:
        logger.debug("Destination edited path=%s", value)
        self._path = value
        self._validate_path()

    @property
    def path_error(self) -> str | None:
        return self._path_error

    @property
    def selected_repository(self) -> Repository | None:
        source = self._repository_source()
        return source[1] if source else None

    async def initialize(self, preselected_account: Account | None = None) -> None:
        """Bind account tabs to connections and activate the initially selected tab."""
        if self._initialized:
            raise RepoCloneError(
                "Clone dialog is already initialized.",
                code=ExitCode.TAB_ERROR,
                hint="Create a new dialog for each clone session.",
            )
        self._initialized = True

        accounts = self._connection_manager.list_connections()
        if len(accounts) > len(_ACCOUNT_TABS):
            logger.warning(
                "Ignoring %s connections beyond the account tabs",
                len(accounts) - len(_ACCOUNT_TABS),
            )
        try:
            for kind, account in zip(_ACCOUNT_TABS, accounts):
                await self._initialize_tab(kind, account)
        finally:
            self._available = [kind for kind in _ACCOUNT_TABS if kind in self._accounts]
            self._available.append(TabKind.URL)

        index = 0
        if preselected_account is not None:
            for kind, account in self._accounts.items():
                if account == preselected_account:
                    index = self._available.index(kind)
                    break
            else:
                logger.warning("Preselected account is not connected account=%s", preselected_account)
        logger.debug(
            "Clone dialog initialized tabs=%s selected=%s",
            [kind.value for kind in self._available],
            self._available[index].value,
        )
        await self.select_tab(index)

    async def select_tab(self, index: int) -> None:
        """Make the tab at ``index`` current and activate it on first selection."""
        if index < 0 or index >= len(self._available):
            raise RepoCloneError(
                f"Tab index out of range: {index}",
                code=ExitCode.VALIDATION_ERROR,
                hint=f"Use an index between 0 and {len(self._available) - 1}.",
            )
        if index != self._selected_index:
            logger.debug("Selected tab changed index=%s tab=%s", index, self._available[index].value)
        self._selected_index = index
        self._update_can_execute()
        await self._activate(self._available[index])

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        for task in self._pending.values():
            task.cancel()
        self._pending.clear()
        for tab in self._tabs.values():
            tab.close()

    async def _initialize_tab(self, kind: TabKind, account: Account) -> None:
        next_state = next_tab_state(self._states[kind], TabEvent.INITIALIZE)
        tab: AccountTab = self._tabs[kind]  # type: ignore[assignment]
        try:
            await tab.initialize(account)
        except Exception as exc:
            error = tab_failure(kind.value, "initialize", exc)
            logger.error("Tab initialization failed (code=%s) account=%s: %s", int(error.code), account, error.message)
            if error is exc:
                raise
            raise error from exc
        self._accounts[kind] = account
        self._states[kind] = next_state
        logger.debug("Tab initialized tab=%s account=%s", kind.value, account)

    async def _activate(self, kind: TabKind) -> None:
        state = self._states[kind]
        if state is TabState.ACTIVATED:
            return
        next_state = next_tab_state(state, TabEvent.SELECT)
        pending = self._pending.get(kind)
        if pending is None:
            pending = asyncio.ensure_future(self._run_activation(kind, next_state))
            self._pending[kind] = pending
        # A cancelled caller must not cancel the activation shared with other callers.
        await asyncio.shield(pending)

    async def _run_activation(self, kind: TabKind, next_state: TabState) -> None:
        try:
            await self._tabs[kind].activate()
        except Exception as exc:
            error = tab_failure(kind.value, "activate", exc)
            logger.error("Tab activation failed (code=%s): %s", int(error.code), error.message)
            if error is exc:
                raise
            raise error from exc
        finally:
            self._pending.pop(kind, None)
        self._states[kind] = next_state
        logger.debug("Tab activated tab=%s", kind.value)

    def _on_repository_changed(self, kind: TabKind, repository: Repository | None) -> None:
        new_path, new_suffix = infer_clone_path(self._path, self._last_suffix, repository)
        self._last_suffix = new_suffix
        if new_path != self._path:
            logger.debug("Destination inferred tab=%s path=%s", kind.value, new_path)
            self._path = new_path
            self._validate_path()
        self._update_can_execute()

    def _validate_path(self) -> None:
        error = DESTINATION_ALREADY_EXISTS if self._service.destination_exists(self._path) else None
        if error != self._path_error:
            logger.debug("Destination validation changed path=%s error=%s", self._path, error)
            self._path_error = error
        self._update_can_execute()

    def _update_can_execute(self) -> None:
        has_repository = any(tab.repository is not None for tab in self._tabs.values())
        self.clone_command.update(has_repository and self._path_error is None)

    def _repository_source(self) -> tuple[TabKind, Repository] | None:
        ordered = [self.selected_tab, *(kind for kind in self._tabs if kind != self.selected_tab)]
        for kind in ordered:
            repository = self._tabs[kind].repository
            if repository is not None:
                return kind, repository
        return None

    def _build_request(self) -> CloneRequest:
        source = self._repository_source()
        if source is None:
            raise RepoCloneError(
                "No repository selected.",
                code=ExitCode.VALIDATION_ERROR,
                hint="Select a repository before cloning.",
            )
        if not self._path.strip():
            raise RepoCloneError(
                "Destination path is empty.",
                code=ExitCode.VALIDATION_ERROR,
                hint="Enter a destination folder for the clone.",
            )
        kind, repository = source
        return CloneRequest(repository=repository, destination=self._path, account=self.account_for(kind))
