"""Unit tests for the scan command.

The probe is replaced by a MemoryAttributeProbe built over a real
temporary tree; root/mnt is placed on another device where needed.
"""

import json
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from antiquarantine import DEFAULT_ATTRIBUTE
from antiquarantine.attributes.memory import MemoryAttributeProbe
from antiquarantine.cli.main import app
from antiquarantine.sweep.device import device_of
from typer.testing import CliRunner

runner = CliRunner()

ProbeFactory = Callable[..., MemoryAttributeProbe]


@pytest.fixture
def scan_root(make_tree: Callable[..., Path]) -> Path:
    return make_tree(["a", "b", "sub/c", "mnt/d"])


@pytest.fixture
def probe(scan_root: Path, tree_probe: ProbeFactory) -> Iterator[MemoryAttributeProbe]:
    """Probe where a, sub/c, and mnt/d carry the attribute and mnt is foreign."""
    memory_probe = tree_probe(scan_root, ["a", "sub/c", "mnt/d"])
    mnt = str(scan_root / "mnt")

    def _device_of(path: str, *, follow_symlinks: bool = False) -> int:
        if path == mnt:
            return -1
        return device_of(path, follow_symlinks=follow_symlinks)

    with (
        patch("antiquarantine.cli.types.get_default_probe", return_value=memory_probe),
        patch("antiquarantine.sweep.walker.device_of", side_effect=_device_of),
    ):
        yield memory_probe


class TestScanList:
    """Tests for aq scan without --remove."""

    def test_lists_paths_with_attribute(self, scan_root: Path, probe: MemoryAttributeProbe) -> None:
        """Exactly the same-device paths with the attribute are listed."""
        result = runner.invoke(app, ["scan", str(scan_root)])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert str(scan_root / "a") in lines
        assert str(scan_root / "sub" / "c") in lines
        assert str(scan_root / "b") not in lines
        assert str(scan_root / "mnt" / "d") not in lines
        assert probe.names(str(scan_root / "a")) == {DEFAULT_ATTRIBUTE}

    def test_nothing_found(self, scan_root: Path, tree_probe: ProbeFactory) -> None:
        """A clean tree exits 0 with a note."""
        clean = tree_probe(scan_root)
        with patch("antiquarantine.cli.types.get_default_probe", return_value=clean):
            result = runner.invoke(app, ["scan", str(scan_root)])

        assert result.exit_code == 0
        assert "No paths with" in result.output

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory exits 2."""
        with patch(
            "antiquarantine.cli.types.get_default_probe",
            return_value=MemoryAttributeProbe(),
        ):
            result = runner.invoke(app, ["scan", str(tmp_path / "nope")])

        assert result.exit_code == 2
        assert "Directory not found" in result.output

    @pytest.mark.parametrize("workers", ["1", "3"])
    def test_workers_option(
        self, scan_root: Path, probe: MemoryAttributeProbe, workers: str
    ) -> None:
        """--workers changes the pool size, not the result."""
        result = runner.invoke(app, ["scan", "--workers", workers, str(scan_root)])

        assert result.exit_code == 0
        assert str(scan_root / "a") in result.output.splitlines()
        assert all(count == 1 for count in probe.probe_calls.values())

    def test_workers_out_of_range(self, scan_root: Path, probe: MemoryAttributeProbe) -> None:
        """A worker count below 1 is a usage error."""
        result = runner.invoke(app, ["scan", "--workers", "0", str(scan_root)])

        assert result.exit_code == 2
        assert probe.probe_calls == {}

    def test_custom_attribute(self, scan_root: Path, probe: MemoryAttributeProbe) -> None:
        """--attribute selects which attribute is listed."""
        probe.add(str(scan_root / "b"), "user.tag")

        result = runner.invoke(app, ["--attribute", "user.tag", "scan", str(scan_root)])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert str(scan_root / "b") in lines
        assert str(scan_root / "a") not in lines

    def test_failures_exit_1(self, scan_root: Path, tree_probe: ProbeFactory) -> None:
        """Per-path failures are reported and make the run exit 1."""
        failing = tree_probe(scan_root, ["a"], failures={"b": "Permission denied"})

        with patch("antiquarantine.cli.types.get_default_probe", return_value=failing):
            result = runner.invoke(app, ["scan", str(scan_root)])

        assert result.exit_code == 1
        assert str(scan_root / "a") in result.output.splitlines()
        assert "Permission denied" in result.output
        assert "1 path(s) failed" in result.output


class TestScanRemove:
    """Tests for aq scan --remove."""

    def test_removes_same_device_only(self, scan_root: Path, probe: MemoryAttributeProbe) -> None:
        """The attribute is removed under the root but not past the boundary."""
        result = runner.invoke(app, ["scan", "--remove", str(scan_root)])

        assert result.exit_code == 0
        assert "Removed" in result.output
        assert "2 path(s)" in result.output
        assert probe.names(str(scan_root / "a")) == set()
        assert probe.names(str(scan_root / "sub" / "c")) == set()
        assert probe.names(str(scan_root / "mnt" / "d")) == {DEFAULT_ATTRIBUTE}

    def test_second_run_is_noop(self, scan_root: Path, probe: MemoryAttributeProbe) -> None:
        """Running -r twice removes nothing the second time."""
        runner.invoke(app, ["scan", "-r", str(scan_root)])

        result = runner.invoke(app, ["scan", "-r", str(scan_root)])

        assert result.exit_code == 0
        assert "Removed" not in result.output
        assert "No paths with" in result.output

    def test_quiet(self, scan_root: Path, probe: MemoryAttributeProbe) -> None:
        """--quiet keeps per-path lines but drops the summary."""
        result = runner.invoke(app, ["--quiet", "scan", "-r", str(scan_root)])

        assert result.exit_code == 0
        assert "path(s)" not in result.output
        assert result.output.count("Removed") == 2


class TestScanJson:
    """Tests for aq scan --format json."""

    def test_json_list(self, scan_root: Path, probe: MemoryAttributeProbe) -> None:
        """JSON output carries the sorted paths and counters."""
        result = runner.invoke(app, ["scan", "--format", "json", str(scan_root)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["root"] == str(scan_root)
        assert data["attribute"] == DEFAULT_ATTRIBUTE
        assert data["mode"] == "list"
        assert data["paths"] == sorted([str(scan_root / "a"), str(scan_root / "sub" / "c")])
        assert data["errors"] == []
        assert data["walk_error"] is None
        assert data["stats"]["present"] == 2
        assert data["stats"]["removed"] == 0

    def test_json_remove(self, scan_root: Path, probe: MemoryAttributeProbe) -> None:
        """JSON output in remove mode reports removals."""
        result = runner.invoke(app, ["scan", "-r", "-f", "json", str(scan_root)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["mode"] == "remove"
        assert data["stats"]["removed"] == 2
        assert len(data["paths"]) == 2


class TestScanPathOutput:
    """Paths are printed exactly as they exist on disk."""

    NAMES = ["a:smile:b", "tab\there", "x:thumbs_up:.dmg"]

    @pytest.fixture
    def odd_root(self, make_tree: Callable[..., Path]) -> Path:
        return make_tree([*self.NAMES, "plain"])

    def test_list_keeps_names(self, odd_root: Path, tree_probe: ProbeFactory) -> None:
        """Shortcodes and tabs in names survive the listing."""
        odd_probe = tree_probe(odd_root, self.NAMES)

        with patch("antiquarantine.cli.types.get_default_probe", return_value=odd_probe):
            result = runner.invoke(app, ["scan", str(odd_root)])

        assert result.exit_code == 0
        assert sorted(result.stdout.splitlines()) == sorted(
            str(odd_root / name) for name in self.NAMES
        )

    def test_remove_lines_keep_names(self, odd_root: Path, tree_probe: ProbeFactory) -> None:
        """Removal confirmations name the real path, one line per removal on stdout."""
        odd_probe = tree_probe(odd_root, self.NAMES)

        with patch("antiquarantine.cli.types.get_default_probe", return_value=odd_probe):
            result = runner.invoke(app, ["scan", "-r", str(odd_root)])

        assert result.exit_code == 0
        assert sorted(result.stdout.splitlines()) == sorted(
            f"Removed {DEFAULT_ATTRIBUTE} from: {odd_root / name}" for name in self.NAMES
        )
        assert "3 path(s)" in result.stderr


class TestScanUnlistableRoot:
    """A root that cannot be listed is a failed run, not an empty one."""

    def test_exit_1(self, scan_root: Path, tree_probe: ProbeFactory) -> None:
        """The walk error is reported and the run exits 1."""
        real_scandir = os.scandir

        def _scandir(path: str) -> object:
            if path == str(scan_root):
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        with (
            patch(
                "antiquarantine.cli.types.get_default_probe",
                return_value=tree_probe(scan_root, ["a"]),
            ),
            patch("antiquarantine.sweep.walker.os.scandir", side_effect=_scandir),
        ):
            result = runner.invoke(app, ["scan", "-r", str(scan_root)])

        assert result.exit_code == 1
        assert "Cannot walk" in result.output
        assert "Permission denied" in result.output
        assert "No paths with" not in result.output

    def test_json_reports_walk_error(self, scan_root: Path, tree_probe: ProbeFactory) -> None:
        """JSON output carries the walk error."""
        real_scandir = os.scandir

        def _scandir(path: str) -> object:
            if path == str(scan_root):
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        with (
            patch(
                "antiquarantine.cli.types.get_default_probe",
                return_value=tree_probe(scan_root),
            ),
            patch("antiquarantine.sweep.walker.os.scandir", side_effect=_scandir),
        ):
            result = runner.invoke(app, ["scan", "-f", "json", str(scan_root)])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert "Permission denied" in data["walk_error"]
