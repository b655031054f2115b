"""Tests for mpvcompgen.parser.expander."""

from __future__ import annotations

import pytest

from mpvcompgen.models import OptionKind, OptionRecord, OptionTable, StaticCandidates
from mpvcompgen.parser.expander import ObjectExpander, chain_stem


def _object(name: str, *instances: str) -> OptionRecord:
    return OptionRecord(
        name=name, kind=OptionKind.OBJECT, candidates=StaticCandidates(values=list(instances))
    )


SCALE_HELP = (
    "Options for scale:\n"
    " w                Integer (-11 to 16384) (default: -2)\n"
    " flags            String (default: bicubic)\n"
)

LAVFI_HELP = (
    "Options for lavfi:\n"
    " graph            Object settings list (default: )\n"
    " fmt              Image format (default: unset)\n"
)


@pytest.mark.parametrize(
    ("name", "stem"),
    [("vf", "vf"), ("vf-add", "vf"), ("af-toggle", "af"), ("ao", "ao")],
)
def test_chain_stem(name: str, stem: str) -> None:
    assert chain_stem(name) == stem


class TestObjectExpander:
    def test_family_shares_one_schema(self, make_source) -> None:
        source, fake = make_source({("--vf", "scale=help"): SCALE_HELP})
        table = OptionTable()
        for name in ("vf", "vf-add", "vf-append"):
            table.add(_object(name, "scale"))

        index = ObjectExpander(source).expand(table)

        assert fake.count("--vf", "scale=help") == 1
        assert index.parameters("vf-add", "scale") is index.parameters("vf", "scale")
        assert sorted(index.parameters("vf-append", "scale")) == ["flags", "w"]
        assert table.filter_args is index

    def test_parameters_classified(self, make_source) -> None:
        source, _ = make_source({("--vf", "scale=help"): SCALE_HELP})
        table = OptionTable()
        table.add(_object("vf", "scale"))

        params = ObjectExpander(source).expand(table).parameters("vf", "scale")

        assert params["w"].kind == OptionKind.NUMERIC
        assert params["w"].values == ["-2", "-11-16384"]
        assert params["flags"].values == ["bicubic"]

    def test_no_second_level_expansion(self, make_source) -> None:
        source, fake = make_source({("--vf", "lavfi=help"): LAVFI_HELP})
        table = OptionTable()
        table.add(_object("vf", "lavfi"))

        params = ObjectExpander(source, video_formats=["nv12"]).expand(table).parameters(
            "vf", "lavfi"
        )

        assert params["graph"].kind == OptionKind.OBJECT
        assert params["graph"].values == []
        assert params["fmt"].values == ["nv12"]
        assert fake.calls == [("--vf", "lavfi=help")]

    def test_objects_outside_namespaces_skipped(self, make_source) -> None:
        source, fake = make_source({})
        table = OptionTable()
        table.add(_object("demuxer", "lavf", "mkv"))
        table.add(_object("ad", "mp3float"))

        index = ObjectExpander(source).expand(table)

        assert len(index) == 0
        assert fake.calls == []

    def test_namespaces_configurable(self, make_source) -> None:
        source, fake = make_source({("--af", "volume=help"): " volume  Float (0 to 10)\n"})
        table = OptionTable()
        table.add(_object("af", "volume"))
        table.add(_object("vf", "scale"))

        index = ObjectExpander(source, namespaces=["af"]).expand(table)

        assert index.has_instance("af", "volume")
        assert not index.has_instance("vf", "scale")
        assert fake.calls == [("--af", "volume=help")]

    def test_instance_without_parameters(self, make_source) -> None:
        source, _ = make_source({})
        table = OptionTable()
        table.add(_object("vf", "crop"))

        index = ObjectExpander(source).expand(table)

        assert index.has_instance("vf", "crop")
        assert index.parameters("vf", "crop") == {}
