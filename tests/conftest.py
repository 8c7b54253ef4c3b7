"""Pytest fixtures for rpclink tests."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="rpclink-tests-"))
os.environ["RPCLINK_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["RPCLINK_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ["RPCLINK_RUNTIME_DIR"] = str(_TEST_BASE_DIR / "runtime")

if TYPE_CHECKING:
    from collections.abc import Generator


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=30,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def runtime_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point discovery at an empty per-test runtime directory."""
    path = tmp_path / "runtime"
    path.mkdir()
    monkeypatch.setenv("RPCLINK_RUNTIME_DIR", str(path))
    return path


@pytest.fixture
def short_tmp() -> Generator[Path, None, None]:
    """Create a short temp directory for Unix socket paths (macOS 104-byte limit)."""
    d = tempfile.mkdtemp(prefix="r-", dir="/tmp")
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)
