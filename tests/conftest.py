"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import pytest
from antiquarantine import DEFAULT_ATTRIBUTE
from antiquarantine.attributes.memory import MemoryAttributeProbe

QUARANTINE = DEFAULT_ATTRIBUTE


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory for every test."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[logging.Logger]:
    """Undo handler and level changes the CLI makes to the package logger."""
    logger = logging.getLogger("antiquarantine")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Iterable[str]], Path]:
    """Create files and directories under a fresh root.

    Entries ending in "/" become directories; everything else becomes
    a file (parent directories are created as needed).
    """

    def _make(entries: Iterable[str]) -> Path:
        root = tmp_path / "root"
        root.mkdir()
        for entry in entries:
            target = root / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("content")
        return root

    return _make


@pytest.fixture
def tree_probe() -> Callable[..., MemoryAttributeProbe]:
    """Build a MemoryAttributeProbe that knows every path under a root.

    Paths listed in ``present`` (relative to the root) carry the
    quarantine attribute; ``failures`` maps relative paths to error
    messages.
    """

    def _build(
        root: Path,
        present: Iterable[str] = (),
        failures: dict[str, str] | None = None,
    ) -> MemoryAttributeProbe:
        probe = MemoryAttributeProbe(
            failures={str(root / rel): cause for rel, cause in (failures or {}).items()}
        )
        probe.add(str(root))
        for dirpath, dirnames, filenames in os.walk(root):
            for name in [*dirnames, *filenames]:
                probe.add(os.path.join(dirpath, name))
        for rel in present:
            probe.add(str(root / rel), QUARANTINE)
        return probe

    return _build
