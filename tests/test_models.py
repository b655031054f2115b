"""Tests for mpvcompgen.models: candidate normalisation and option tables."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mpvcompgen.models import (
    DeferredCandidates,
    DeferredQuery,
    FilterArgumentIndex,
    OptionKind,
    OptionRecord,
    OptionTable,
    StaticCandidates,
    normalize_numbers,
    unique,
)


# ---------------------------------------------------------------------------
# Candidate normalisation
# ---------------------------------------------------------------------------


class TestNormalizeNumbers:
    def test_integer_and_float_forms_collapse(self) -> None:
        assert normalize_numbers(["1", "1.0", "-1", "-1.0", "2"]) == ["1.0", "-1.0", "2"]

    def test_float_spellings_rewritten(self) -> None:
        assert normalize_numbers(["1.000000", "0.500000"]) == ["1.0", "0.5"]

    def test_ranges_and_words_untouched(self) -> None:
        assert normalize_numbers(["0.01-100.0", "auto", "50%"]) == ["0.01-100.0", "auto", "50%"]

    def test_integer_without_float_twin_kept(self) -> None:
        assert normalize_numbers(["-60", "60"]) == ["-60", "60"]

    def test_equal_floats_deduplicated(self) -> None:
        assert normalize_numbers(["1.0", "1.000000"]) == ["1.0"]


class TestUnique:
    def test_first_occurrence_wins(self) -> None:
        assert unique(["auto", "no", "yes", "auto"]) == ["auto", "no", "yes"]

    def test_none_dropped(self) -> None:
        assert unique([None, "no", None]) == ["no"]


class TestCandidates:
    def test_static_values_normalised_on_construction(self) -> None:
        candidates = StaticCandidates(values=["yes", "no", "no", None])
        assert candidates.values == ["yes", "no"]

    def test_record_discriminates_candidate_variants(self) -> None:
        record = OptionRecord.model_validate(
            {"name": "profile", "kind": "Profile",
             "candidates": {"type": "deferred", "query": "profiles"}}
        )
        assert isinstance(record.candidates, DeferredCandidates)
        assert record.deferred == DeferredQuery.PROFILES
        assert record.values == []

    def test_static_record_has_no_deferred_query(self) -> None:
        record = OptionRecord(name="hwdec", kind=OptionKind.CHOICE,
                              candidates=StaticCandidates(values=["auto"]))
        assert record.deferred is None
        assert record.values == ["auto"]

    def test_records_are_immutable(self) -> None:
        record = OptionRecord(name="hwdec", kind=OptionKind.CHOICE)
        with pytest.raises(ValidationError):
            record.name = "vo"


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TestOptionTable:
    def test_name_lives_in_one_bucket(self) -> None:
        table = OptionTable()
        table.add(OptionRecord(name="fs", kind=OptionKind.ALIAS))
        table.add(OptionRecord(name="fs", kind=OptionKind.FLAG))
        assert "fs" not in table.bucket(OptionKind.ALIAS)
        assert table.bucket(OptionKind.FLAG)["fs"].kind == OptionKind.FLAG
        assert len(table) == 1

    def test_find_skips_aliases_by_default(self) -> None:
        table = OptionTable()
        table.add(OptionRecord(name="fs", kind=OptionKind.ALIAS))
        assert table.find("fs") is None
        assert table.find("fs", include_aliases=True) is not None

    def test_of_kind_merges_and_sorts(self) -> None:
        table = OptionTable()
        table.add(OptionRecord(name="vid", kind=OptionKind.CHOICE))
        table.add(OptionRecord(name="fs", kind=OptionKind.FLAG))
        table.add(OptionRecord(name="aid", kind=OptionKind.CHOICE))
        names = [r.name for r in table.of_kind(OptionKind.CHOICE, OptionKind.FLAG)]
        assert names == ["aid", "fs", "vid"]

    def test_counts_skip_empty_buckets(self) -> None:
        table = OptionTable(buckets={OptionKind.ALIAS: {}})
        table.add(OptionRecord(name="fs", kind=OptionKind.FLAG))
        assert table.counts() == {"Flag": 1}

    def test_empty_table(self) -> None:
        table = OptionTable()
        assert len(table) == 0
        assert table.names() == []
        assert table.mpv_version == "unknown"


class TestFilterArgumentIndex:
    def _index(self) -> FilterArgumentIndex:
        index = FilterArgumentIndex()
        index.add_instance("vf", "scale", {
            "w": OptionRecord(name="w", kind=OptionKind.NUMERIC,
                              candidates=StaticCandidates(values=["-2"])),
            "flags": OptionRecord(name="flags", kind=OptionKind.STRING),
        })
        index.link("vf", "vf")
        index.link("vf-add", "vf")
        return index

    def test_family_shares_schema(self) -> None:
        index = self._index()
        assert index.parameters("vf-add", "scale") is index.parameters("vf", "scale")

    def test_instance_parameters_sorted(self) -> None:
        assert list(self._index().instance_parameters()) == [
            ("vf", "scale", ["flags", "w"]),
            ("vf-add", "scale", ["flags", "w"]),
        ]

    def test_parameter_candidates(self) -> None:
        assert ("vf", "scale", "w", ["-2"]) in list(self._index().parameter_candidates())

    def test_len_counts_instances(self) -> None:
        index = self._index()
        assert len(index) == 1
        assert index.has_instance("vf", "scale")
        assert not index.has_instance("af", "scale")
