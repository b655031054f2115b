"""Tests for mpvcompgen.parser.values."""

from __future__ import annotations

import pytest

from mpvcompgen.parser.values import (
    extract_alias_target,
    extract_choices,
    extract_default,
    extract_range,
    has_no_cfg,
    wants_directory,
    wants_file,
)


class TestExtractors:
    def test_default(self) -> None:
        assert extract_default("Double (0.01 to 100) (default: 1.000000)") == "1.000000"

    def test_empty_default(self) -> None:
        assert extract_default("String (default: )") is None

    def test_range(self) -> None:
        assert extract_range("Integer (-11 to 16384) (default: -2)") == "-11-16384"

    def test_no_range(self) -> None:
        assert extract_range("Choices: no yes (default: no)") is None

    def test_choices_in_source_order(self) -> None:
        assert extract_choices("Choices: no, yes, auto (default: auto)") == ["no", "yes", "auto"]

    def test_choices_space_separated(self) -> None:
        assert extract_choices("Choices: fixed float double (default: float)") == [
            "fixed", "float", "double",
        ]

    def test_alias_target_loses_dashes(self) -> None:
        assert extract_alias_target("alias for --fullscreen") == "fullscreen"
        assert extract_alias_target("alias for fmt") == "fmt"
        assert extract_alias_target("Flag (default: no)") is None


class TestPredicates:
    def test_no_cfg(self) -> None:
        assert has_no_cfg("Flag [nocfg]")
        assert not has_no_cfg("Flag (default: no)")

    @pytest.mark.parametrize(
        ("name", "tail", "expected"),
        [
            ("include", "String (default: ) [file]", True),
            ("sub-files-add", "String (default: )", True),
            ("scripts", "String list (default: )", True),
            ("script", "String (default: )", True),
            ("title", "String (default: mpv)", False),
        ],
    )
    def test_wants_file(self, name: str, tail: str, expected: bool) -> None:
        assert wants_file(name, tail) is expected

    def test_wants_directory(self) -> None:
        assert wants_directory("screenshot-dir")
        assert wants_directory("watch-later-directory")
        assert not wants_directory("include")
