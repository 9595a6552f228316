"""Test suite for the exclusion state builder and predicate."""

from __future__ import annotations

from split_or_die.config.models import DEFAULT_EXCLUDE_GLOBS
from split_or_die.core.data.filesystem.exclusions import (
    build_exclude_glob,
    build_exclusion_state,
    is_explicitly_excluded,
)


class TestBuildExcludeGlob:
    """Test build_exclude_glob."""

    def test_no_patterns(self) -> None:
        assert build_exclude_glob([]) is None
        assert build_exclude_glob(["", "   "]) is None

    def test_single_pattern_returned_as_is(self) -> None:
        assert build_exclude_glob(["**/dist/**"]) == "**/dist/**"

    def test_multiple_patterns_grouped(self) -> None:
        assert build_exclude_glob(["**/a/**", "**/b/**"]) == "{**/a/**,**/b/**}"

    def test_duplicates_removed_in_first_seen_order(self) -> None:
        result = build_exclude_glob(["**/b/**", " **/a/** ", "**/b/**"])
        assert result == "{**/b/**,**/a/**}"


class TestBuildExclusionState:
    """Test build_exclusion_state."""

    def test_defaults_only(self) -> None:
        state = build_exclusion_state([], [], [], [])

        assert state.exclude_extensions == frozenset()
        assert state.excluded_folders == ()
        assert state.excluded_files == ()
        assert state.exclude_glob is not None
        for pattern in DEFAULT_EXCLUDE_GLOBS:
            assert pattern in state.exclude_glob

    def test_configured_globs_merged_after_defaults(self) -> None:
        state = build_exclusion_state([], [], [], ["**/generated/**"], default_globs=["**/dist/**"])
        assert state.exclude_glob == "{**/dist/**,**/generated/**}"

    def test_no_globs_at_all(self) -> None:
        state = build_exclusion_state([], [], [], [], default_globs=[])
        assert state.exclude_glob is None

    def test_extensions_normalized(self) -> None:
        state = build_exclusion_state([], [], [".MD", "txt", "c++"], [])
        assert state.exclude_extensions == frozenset({"md", "txt"})

    def test_paths_normalized_for_comparison_and_kept_for_display(self) -> None:
        state = build_exclusion_state(["/work/src/"], ["/work/a//b.ts"], [], [])

        assert state.excluded_folder_set == frozenset({"/work/src"})
        assert state.excluded_file_set == frozenset({"/work/a/b.ts"})
        assert state.excluded_folders == ("/work/src/",)
        assert state.excluded_files == ("/work/a//b.ts",)

    def test_non_string_entries_dropped(self) -> None:
        state = build_exclusion_state(["/work/src", 42, None], [{"path": "/x"}], [], [])

        assert state.excluded_folders == ("/work/src",)
        assert state.excluded_files == ()


class TestIsExplicitlyExcluded:
    """Test is_explicitly_excluded."""

    def test_excluded_file(self) -> None:
        state = build_exclusion_state([], ["/work/src/big.ts"], [], [])

        assert is_explicitly_excluded("/work/src/big.ts", state)
        assert not is_explicitly_excluded("/work/src/other.ts", state)

    def test_excluded_folder_covers_descendants_and_itself(self) -> None:
        state = build_exclusion_state(["/root/foo"], [], [], [])

        assert is_explicitly_excluded("/root/foo/bar.ts", state)
        assert is_explicitly_excluded("/root/foo/nested/bar.ts", state)
        assert is_explicitly_excluded("/root/foo", state)

    def test_folder_boundary_is_exact(self) -> None:
        state = build_exclusion_state(["/root/foo"], [], [], [])
        assert not is_explicitly_excluded("/root/foo2/bar.ts", state)

    def test_trailing_separator_on_excluded_folder(self) -> None:
        state = build_exclusion_state(["/root/foo/"], [], [], [])

        assert is_explicitly_excluded("/root/foo/bar.ts", state)
        assert not is_explicitly_excluded("/root/foo2/bar.ts", state)

    def test_extension_not_considered(self) -> None:
        state = build_exclusion_state([], [], ["md"], [])
        assert not is_explicitly_excluded("/work/README.md", state)
