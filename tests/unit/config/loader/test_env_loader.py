"""Tests for the environment variable loader."""

from __future__ import annotations

import pytest

from split_or_die.config.exceptions import EnvLoadError
from split_or_die.config.loader import EnvLoader


class TestEnvLoader:
    """Test EnvLoader."""

    def test_nested_keys(self) -> None:
        loader = EnvLoader(environ={"SPLIT_OR_DIE_SCANNER__SIZE_THRESHOLD_KB": "40"})
        assert loader.load() == {"scanner": {"size_threshold_kb": 40}}

    def test_unprefixed_variables_ignored(self) -> None:
        loader = EnvLoader(environ={"HOME": "/root", "SPLIT_OR_DIE_": "x"})
        assert loader.load() == {}

    def test_several_keys_share_a_section(self) -> None:
        loader = EnvLoader(
            environ={
                "SPLIT_OR_DIE_SCANNER__ENABLE": "false",
                "SPLIT_OR_DIE_SCANNER__RUN_ON_SAVE": "yes",
                "SPLIT_OR_DIE_APPLICATION__LOG_LEVEL": "DEBUG",
            }
        )

        assert loader.load() == {
            "scanner": {"enable": False, "run_on_save": True},
            "application": {"log_level": "DEBUG"},
        }

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("OFF", False),
            ("12", 12),
            ("1.5", 1.5),
            ("1e3", 1000.0),
            ('["md", "log"]', ["md", "log"]),
            ("plain", "plain"),
            ("", ""),
        ],
    )
    def test_type_conversion(self, raw: str, expected: object) -> None:
        loader = EnvLoader(environ={"SPLIT_OR_DIE_VALUE": raw})
        assert loader.load() == {"value": expected}

    def test_conversion_disabled(self) -> None:
        loader = EnvLoader(convert_types=False, environ={"SPLIT_OR_DIE_VALUE": "12"})
        assert loader.load() == {"value": "12"}

    def test_malformed_json(self) -> None:
        loader = EnvLoader(environ={"SPLIT_OR_DIE_SCANNER__EXCLUDE_GLOBS": "[unclosed"})

        with pytest.raises(EnvLoadError) as exc_info:
            _ = loader.load()

        assert exc_info.value.env_var == "SPLIT_OR_DIE_SCANNER__EXCLUDE_GLOBS"
