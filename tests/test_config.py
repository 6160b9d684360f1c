from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from repoclone.config import AppConfig, load_config, save_config


@pytest.fixture(autouse=True)
def _clear_root_env(monkeypatch) -> None:
    monkeypatch.delenv("REPOCLONE_DEFAULT_ROOT", raising=False)


def test_load_defaults_when_config_missing(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "config.toml")
    assert cfg.default_clone_root == ""
    assert cfg.accounts == []
    assert cfg.log_level == "INFO"


def test_config_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    original = AppConfig(
        default_clone_root="/src/repos",
        accounts=["https://github.com", "https://ghe.example.com"],
        log_level="debug",
    )
    save_config(original, path)
    loaded = load_config(path)
    assert loaded.default_clone_root == "/src/repos"
    assert loaded.accounts == ["https://github.com", "https://ghe.example.com"]
    assert loaded.log_level == "DEBUG"


def test_env_root_overrides_config_file(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "config.toml"
    path.write_text('default_clone_root = "/from/file"\n', encoding="utf-8")
    monkeypatch.setenv("REPOCLONE_DEFAULT_ROOT", "/from/env")
    loaded = load_config(path)
    assert loaded.default_clone_root == "/from/env"


def test_corrupt_toml_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("not = [valid", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.accounts == []
    assert cfg.log_level == "INFO"


def test_invalid_fields_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                "default_clone_root = 42",
                'accounts = ["github.com", 7, "ftp://bad", "GITHUB.COM", "ghe.local", "third.com"]',
                'log_level = "loud"',
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    loaded = load_config(path)
    assert loaded.default_clone_root == ""
    assert loaded.accounts == ["https://github.com", "https://ghe.local"]
    assert loaded.log_level == "INFO"


def test_config_model_rejects_invalid_assignment() -> None:
    cfg = AppConfig()
    with pytest.raises(ValidationError):
        cfg.log_level = "loud"
    with pytest.raises(ValidationError):
        cfg.accounts = ["a.com", "b.com", "c.com"]
