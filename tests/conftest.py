"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from split_or_die.config.models import ScannerConfig
from split_or_die.config.store import MemorySettingsStore
from split_or_die.core.data.state_store import MemoryStateStore
from split_or_die.core.diagnostics import DiagnosticCollection
from split_or_die.core.session import ScanSession
from split_or_die.utils.logging import clear_correlation_id
from tests.fixtures.filesystem import FakeFileSystem

WORKSPACE_ROOT = "/work"


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Empty in-memory filesystem."""
    return FakeFileSystem()


@pytest.fixture
def state_store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def settings_store() -> MemorySettingsStore:
    """Settings with defaults (20 KB threshold)."""
    return MemorySettingsStore(ScannerConfig())


@pytest.fixture
def diagnostics() -> DiagnosticCollection:
    return DiagnosticCollection()


@pytest.fixture
def session(
    fake_fs: FakeFileSystem,
    state_store: MemoryStateStore,
    settings_store: MemorySettingsStore,
    diagnostics: DiagnosticCollection,
) -> ScanSession:
    """Session over a single /work root backed by in-memory collaborators."""
    return ScanSession(
        [WORKSPACE_ROOT],
        fs=fake_fs,
        state=state_store,
        settings=settings_store,
        diagnostics=diagnostics,
    )


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo configure_logging calls and correlation IDs left behind by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_correlation_id()
