"""Tests for the incremental single-file check."""

from __future__ import annotations

import pytest

from split_or_die.core.data.filesystem.exclusions import ExclusionState, build_exclusion_state
from split_or_die.core.diagnostics import DiagnosticCollection, create_diagnostic
from split_or_die.core.updater import check_file, find_owning_root
from split_or_die.types import ResultSet, ScanEntry
from tests.fixtures.filesystem import FakeFileSystem, sized_content

THRESHOLD = 20 * 1024
ROOTS = ("/work",)


def _exclusion(folders: list[str] | None = None, files: list[str] | None = None) -> ExclusionState:
    return build_exclusion_state(folders or [], files or [], ["md"], [])


class TestFindOwningRoot:
    """Test find_owning_root."""

    def test_inside_root(self) -> None:
        assert find_owning_root("/work/src/a.ts", ["/work"]) == "/work"

    def test_outside_every_root(self) -> None:
        assert find_owning_root("/elsewhere/a.ts", ["/work"]) is None

    def test_prefix_sibling_is_outside(self) -> None:
        assert find_owning_root("/work2/a.ts", ["/work"]) is None

    def test_deepest_root_wins(self) -> None:
        assert find_owning_root("/work/pkg/a.ts", ["/work", "/work/pkg"]) == "/work/pkg"

    def test_no_roots(self) -> None:
        assert find_owning_root("/work/a.ts", []) is None


class TestCheckFile:
    """Test check_file."""

    pytestmark = pytest.mark.asyncio

    @pytest.fixture
    def results(self) -> ResultSet:
        return {}

    async def test_oversized_file_added(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/src/big.ts": sized_content(25_000, newlines=600)})

        entry = await check_file("/work/src/big.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS)

        assert entry == ScanEntry(path="/work/src/big.ts", size=25_000, line_count=601)
        assert results["/work/src/big.ts"] == entry
        assert diagnostics.get("/work/src/big.ts") == (create_diagnostic(25_000, 601),)

    async def test_file_uri_accepted(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/src/big.ts": sized_content(25_000)})

        entry = await check_file("file:///work/src/big.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS)

        assert entry is not None
        assert "/work/src/big.ts" in results

    async def test_shrunk_file_removed(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/a.ts": sized_content(100)})
        results["/work/a.ts"] = ScanEntry("/work/a.ts", 30_000, 700)
        diagnostics.set("/work/a.ts", [create_diagnostic(30_000, 700)])

        entry = await check_file("/work/a.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS)

        assert entry is None
        assert results == {}
        assert "/work/a.ts" not in diagnostics

    async def test_threshold_boundary(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/exact.ts": sized_content(THRESHOLD), "/work/over.ts": sized_content(THRESHOLD + 1)})

        assert await check_file("/work/exact.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS) is None
        assert await check_file("/work/over.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS) is not None

    async def test_excluded_folder_removes_entry(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/src/big.ts": sized_content(25_000)})
        _ = await check_file("/work/src/big.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS)

        entry = await check_file(
            "/work/src/big.ts", _exclusion(folders=["/work/src"]), THRESHOLD, results, diagnostics, fs, ROOTS
        )

        assert entry is None
        assert results == {}
        assert len(diagnostics) == 0
        assert fs.stat_calls == ["/work/src/big.ts"]

    async def test_glob_excluded_removes_entry(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        path = "/work/pkg/dist/bundle.js"
        fs = FakeFileSystem({path: sized_content(25_000)})
        results[path] = ScanEntry(path=path, size=25_000, line_count=1)
        diagnostics.set(path, [create_diagnostic(25_000, 1)])

        entry = await check_file(path, _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS)

        assert entry is None
        assert results == {}
        assert len(diagnostics) == 0
        assert fs.stat_calls == []

    async def test_glob_matched_relative_to_owning_root(
        self, results: ResultSet, diagnostics: DiagnosticCollection
    ) -> None:
        # "dist" is a root itself, not a folder inside one
        fs = FakeFileSystem({"/dist/src/big.ts": sized_content(25_000)})

        entry = await check_file("/dist/src/big.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ("/dist",))

        assert entry is not None

    async def test_excluded_file(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/big.ts": sized_content(25_000)})

        entry = await check_file(
            "/work/big.ts", _exclusion(files=["/work/big.ts"]), THRESHOLD, results, diagnostics, fs, ROOTS
        )

        assert entry is None
        assert fs.stat_calls == []

    async def test_excluded_extension(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/NOTES.MD": sized_content(25_000)})

        assert await check_file("/work/NOTES.MD", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS) is None

    async def test_outside_workspace_ignored(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/tmp/big.ts": sized_content(25_000)})

        assert await check_file("/tmp/big.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS) is None
        assert fs.stat_calls == []

    async def test_no_workspace_ignored(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/big.ts": sized_content(25_000)})

        assert await check_file("/work/big.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ()) is None

    async def test_non_file_scheme_ignored(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem()

        entry = await check_file("untitled:Untitled-1", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS)

        assert entry is None
        assert fs.stat_calls == []

    async def test_vanished_file_removed(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem()
        results["/work/gone.ts"] = ScanEntry("/work/gone.ts", 30_000, 700)
        diagnostics.set("/work/gone.ts", [create_diagnostic(30_000, 700)])

        assert await check_file("/work/gone.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS) is None
        assert results == {}
        assert len(diagnostics) == 0

    async def test_supplied_content_used_for_line_count(
        self, results: ResultSet, diagnostics: DiagnosticCollection
    ) -> None:
        fs = FakeFileSystem({"/work/big.ts": sized_content(25_000, newlines=10)})

        entry = await check_file(
            "/work/big.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS, content="a\nb\nc"
        )

        assert entry is not None
        assert entry.line_count == 3
        assert fs.read_calls == []

    async def test_unreadable_file_estimated(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/locked.ts": sized_content(102_400)})
        fs.read_errors.add("/work/locked.ts")

        entry = await check_file("/work/locked.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS)

        assert entry is not None
        assert entry.line_count == 2500

    async def test_replaces_existing_entry(self, results: ResultSet, diagnostics: DiagnosticCollection) -> None:
        fs = FakeFileSystem({"/work/big.ts": sized_content(40_000)})
        results["/work/big.ts"] = ScanEntry("/work/big.ts", 30_000, 700)

        entry = await check_file("/work/big.ts", _exclusion(), THRESHOLD, results, diagnostics, fs, ROOTS)

        assert results["/work/big.ts"] is entry
        assert results["/work/big.ts"].size == 40_000
