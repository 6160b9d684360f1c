"""Authenticated account sources."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Iterable
from typing import Protocol

from repoclone.clone.models import Account

logger = py_logging.getLogger(__name__)


class ConnectionManager(Protocol):
    def list_connections(self) -> list[Account]: ...


class StaticConnectionManager:
    """Connection manager over a fixed, ordered set of host addresses."""

    def __init__(self, addresses: Iterable[str | Account] = ()) -> None:
        self._accounts: list[Account] = []
        for address in addresses:
            account = address if isinstance(address, Account) else Account.from_address(address)
            if account in self._accounts:
                logger.debug("Skipping duplicate account host=%s", account)
                continue
            self._accounts.append(account)

    def list_connections(self) -> list[Account]:
        return list(self._accounts)
