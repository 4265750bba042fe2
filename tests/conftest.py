"""Shared test fixtures for relay_bridge tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from relay_bridge.verbose import set_verbose  # noqa: E402


class FakeLinkedIdStore:
    """Fake reverse map that records every lookup."""

    def __init__(self, mapping: dict[str, str] | None = None, error: Exception | None = None) -> None:
        self.mapping = dict(mapping or {})
        self.error = error
        self.lookups: list[str] = []

    def get(self, linked_id: str) -> str | None:
        self.lookups.append(linked_id)
        if self.error is not None:
            raise self.error
        return self.mapping.get(linked_id)


@pytest.fixture
def fake_lid_store() -> FakeLinkedIdStore:
    """Provide an empty fake linked-id store."""
    return FakeLinkedIdStore()


@pytest.fixture(autouse=True)
def _reset_verbose():
    set_verbose(False)
    yield
    set_verbose(False)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("RELAY_BRIDGE_CONFIG_DIR", "RELAY_BRIDGE_LID_MAPPING_DB_PATH", "RELAY_BRIDGE_VERBOSE"):
        monkeypatch.delenv(key, raising=False)
