"""XDG config loading/saving."""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from repoclone.clone.models import Account
from repoclone.errors import RepoCloneError
from repoclone.logging import LOG_LEVELS

DEFAULT_CONFIG_PATH = Path("~/.config/repoclone/config.toml").expanduser()
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ROOT_ENV = "REPOCLONE_DEFAULT_ROOT"
MAX_ACCOUNTS = 2


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    default_clone_root: str = ""
    accounts: list[str] = Field(default_factory=list, max_length=MAX_ACCOUNTS)
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("default_clone_root")
    @classmethod
    def _strip_root(cls, value: str) -> str:
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return normalized


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    if isinstance(value, list):
        return "[" + ", ".join(_toml_scalar(item) for item in value) + "]"
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _normalize_accounts(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    normalized: list[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        try:
            address = Account.from_address(item).host_address
        except RepoCloneError:
            continue
        if address in normalized:
            continue
        normalized.append(address)
        if len(normalized) == MAX_ACCOUNTS:
            break
    return normalized


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    default_clone_root = raw.get("default_clone_root", cfg.default_clone_root)
    if isinstance(default_clone_root, str):
        cfg.default_clone_root = default_clone_root
    env_root = os.getenv(DEFAULT_ROOT_ENV, "").strip()
    if env_root:
        cfg.default_clone_root = env_root

    cfg.accounts = _normalize_accounts(raw.get("accounts", []))

    log_level = raw.get("log_level", cfg.log_level)
    if isinstance(log_level, str) and log_level.strip().upper() in LOG_LEVELS:
        cfg.log_level = log_level

    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return _sanitize({})
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return _sanitize({})
    if not isinstance(raw, dict):
        return _sanitize({})
    return _sanitize(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        f"default_clone_root = {_toml_scalar(config.default_clone_root)}",
        f"accounts = {_toml_scalar(_normalize_accounts(config.accounts))}",
        f"log_level = {_toml_scalar(config.log_level)}",
    ]
    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved
