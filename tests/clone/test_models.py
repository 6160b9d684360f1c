from __future__ import annotations

import pytest
from pydantic import ValidationError

from repoclone.clone.models import Account, CloneRequest, Repository
from repoclone.errors import RepoCloneError


def test_account_address_is_normalized() -> None:
    assert Account.from_address("GitHub.com/").host_address == "https://github.com"
    assert Account.from_address("http://GHE.local:8080").host_address == "http://ghe.local:8080"
    assert Account.from_address("https://github.com") == Account.from_address("github.com")


@pytest.mark.parametrize("address", ["", "   ", "ftp://github.com", "https://"])
def test_invalid_account_address_is_rejected(address: str) -> None:
    with pytest.raises(RepoCloneError):
        Account.from_address(address)


def test_account_string_is_host_address() -> None:
    assert str(Account.from_address("Enterprise.com")) == "https://enterprise.com"


def test_clone_request_requires_destination() -> None:
    with pytest.raises(ValidationError):
        CloneRequest(repository=Repository("org", "repo"), destination="  ")


def test_clone_request_serializes_selection() -> None:
    request = CloneRequest(
        repository=Repository("org", "repo", "https://github.com/org/repo.git"),
        destination=" /src/org/repo ",
        account=Account.from_address("github.com"),
    )

    payload = request.model_dump()

    assert payload["destination"] == "/src/org/repo"
    assert payload["repository"]["owner"] == "org"
    assert payload["account"]["host_address"] == "https://github.com"
