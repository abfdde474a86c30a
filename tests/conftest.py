"""Shared fixtures: a shell-script stand-in for the d2 executable."""

from pathlib import Path

import pytest


def write_script(path: Path, body: str) -> str:
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(0o755)
    return str(path)


@pytest.fixture
def d2_log(tmp_path: Path) -> Path:
    return tmp_path / "d2.log"


@pytest.fixture
def fake_d2(tmp_path: Path, d2_log: Path) -> str:
    """Wraps the input source in <svg>...</svg> and logs every call."""
    return write_script(
        tmp_path / "fake-d2",
        f'echo "$@" >> "{d2_log}"\nprintf \'<svg>%s</svg>\' "$(cat "$1")" > "$2"',
    )


@pytest.fixture
def failing_d2(tmp_path: Path) -> str:
    return write_script(tmp_path / "failing-d2", 'echo "boom: bad syntax" >&2\nexit 1')


@pytest.fixture
def silent_d2(tmp_path: Path) -> str:
    """Exits 0 without writing anything."""
    return write_script(tmp_path / "silent-d2", "exit 0")
