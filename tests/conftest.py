"""Pytest fixtures for quivr_sync tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import FakeQuivr

from quivr_sync import QuivrClient

TEST_API_URL = "https://api.quivr.test"


@pytest.fixture(autouse=True)
def clear_quivr_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of the tests."""
    monkeypatch.delenv("QUIVR_API_KEY", raising=False)
    monkeypatch.delenv("QUIVR_API_URL", raising=False)


@pytest.fixture
def fake_quivr() -> FakeQuivr:
    """Create an empty fake Quivr service."""
    return FakeQuivr()


@pytest.fixture
def quivr_client(fake_quivr: FakeQuivr) -> QuivrClient:
    """Create a QuivrClient talking to the fake service."""
    return QuivrClient("test-key", TEST_API_URL, http_client=fake_quivr.http_client())


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """Create a small vault with nested, hidden and non-markdown files."""
    root = tmp_path / "Notes"
    (root / "projects").mkdir(parents=True)
    (root / ".obsidian").mkdir()
    (root / "b.md").write_text("# B")
    (root / "a.md").write_text("# A")
    (root / "projects" / "plan.md").write_text("# Plan")
    (root / "image.png").write_bytes(b"\x89PNG")
    (root / ".obsidian" / "workspace.md").write_text("hidden")
    return root
