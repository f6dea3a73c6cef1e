"""Shared fixtures: in-memory catalog and keybinding reset."""

from __future__ import annotations

import pytest

from sau.tui.keybindings import KeybindingsManager, set_keybindings

from fake_catalog import SAMPLE_APP, SAMPLE_ROWS, FakeCatalogClient


@pytest.fixture
def catalog() -> FakeCatalogClient:
    return FakeCatalogClient({SAMPLE_APP: list(SAMPLE_ROWS)})


@pytest.fixture(autouse=True)
def reset_keybindings():
    set_keybindings(KeybindingsManager())
    yield
    set_keybindings(KeybindingsManager())
