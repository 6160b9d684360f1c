"""Clone dialog domain models."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator

from repoclone.errors import ExitCode, RepoCloneError


@dataclass(frozen=True)
class Account:
    """One authenticated remote endpoint, identified by its host address."""

    host_address: str

    @classmethod
    def from_address(cls, address: str) -> Account:
        value = address.strip()
        if not value:
            raise RepoCloneError(
                "Account address is empty.",
                code=ExitCode.VALIDATION_ERROR,
                hint="Use a host address such as https://github.com.",
            )
        if "://" not in value:
            value = f"https://{value}"
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise RepoCloneError(
                f"Invalid account address: {address}",
                code=ExitCode.VALIDATION_ERROR,
                hint="Use an http(s) host address such as https://github.com.",
            )
        return cls(host_address=f"{parsed.scheme}://{parsed.netloc.lower()}")

    def __str__(self) -> str:
        return self.host_address


@dataclass(frozen=True)
class Repository:
    owner: str
    name: str
    clone_url: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class CloneRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    repository: Repository
    destination: str
    account: Account | None = None

    @field_validator("destination")
    @classmethod
    def _require_destination(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Destination path is required.")
        return value
