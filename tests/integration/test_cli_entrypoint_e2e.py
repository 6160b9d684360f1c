from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path


def _env(tmp_path: Path) -> dict[str, str]:
    env = dict(os.environ)
    existing = env.get("PYTHONPATH", "")
    src_path = str(Path("src").resolve())
    env["PYTHONPATH"] = f"{src_path}{os.pathsep}{existing}" if existing else src_path
    env["REPOCLONE_DEFAULT_ROOT"] = str(tmp_path / "repos")
    return env


def test_cli_module_reports_invalid_args_via_exit_code(tmp_path: Path) -> None:
    completed = subprocess.run(
        [sys.executable, "-m", "repoclone", "--log-file", str(tmp_path / "rc.log")],
        capture_output=True,
        text=True,
        check=False,
        env=_env(tmp_path),
    )

    assert completed.returncode == 2
    assert "--url" in completed.stderr


def test_cli_module_prints_inferred_destination(tmp_path: Path) -> None:
    completed = subprocess.run(
        [
            sys.executable,
            "-m",
            "repoclone",
            "--url",
            "https://github.com/org/repo.git",
            "--config",
            str(tmp_path / "missing.toml"),
            "--log-level",
            "warning",
            "--log-file",
            str(tmp_path / "rc.log"),
        ],
        capture_output=True,
        text=True,
        check=False,
        env=_env(tmp_path),
    )

    assert completed.returncode == 0
    assert completed.stdout.strip().endswith(str(tmp_path / "repos" / "org" / "repo"))
