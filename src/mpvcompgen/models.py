"""Canonical Pydantic models shared across all mpvcompgen modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Parser input** -- :class:`OptionDescriptor`, one parsed line of mpv's
option roster.

**Classification output** -- :class:`OptionKind`, the tagged candidate
variant (:class:`StaticCandidates` / :class:`DeferredCandidates`) and
:class:`OptionRecord`.

**Tables** -- :class:`FilterArgumentIndex` (per filter parameter schemas)
and :class:`OptionTable` (every option, bucketed by kind), built once by
:func:`~mpvcompgen.parser.builder.build_option_table` and read-only
afterwards.

Candidate lists are normalised when a :class:`StaticCandidates` is
constructed: ``None`` entries are dropped, duplicates removed (first
occurrence wins) and numerically equal spellings collapsed, see
:func:`normalize_numbers`.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable, Iterator
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Candidate normalisation ---

_NUMBER_RE = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")


def unique(values: Iterable[Optional[str]]) -> list[str]:
    """Drop ``None`` entries and duplicates, keeping first-occurrence order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value is None or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def _is_float_form(value: str) -> bool:
    return "." in value or "e" in value.lower()


def normalize_numbers(values: list[str]) -> list[str]:
    """Collapse numerically equal candidates into their floating form.

    An integer spelling (``"1"``) is dropped when a floating spelling of the
    same number (``"1.0"``, ``"1.000000"``) is also present, and every
    floating spelling is rewritten to Python's shortest ``repr`` form.
    Non-numeric entries and the relative order of survivors are untouched.

    Example::

        >>> normalize_numbers(["1", "1.0", "-1", "-1.0", "2"])
        ['1.0', '-1.0', '2']
        >>> normalize_numbers(["1.000000", "0.01-100.0"])
        ['1.0', '0.01-100.0']
    """
    floats = {
        float(v) for v in values if _NUMBER_RE.match(v) and _is_float_form(v)
    }
    result: list[str] = []
    for value in values:
        if not _NUMBER_RE.match(value):
            result.append(value)
        elif _is_float_form(value):
            result.append(repr(float(value)))
        elif float(value) not in floats:
            result.append(value)
    return unique(result)


# --- Kinds and candidates ---


class OptionKind(str, enum.Enum):
    """Canonical classification bucket governing an option's completion.

    ``ALIAS`` only exists transiently: the alias resolver rewrites every
    alias to the kind of its target before the table is finalised.
    """

    NUMERIC = "Numeric"
    CHOICE = "Choice"
    FLAG = "Flag"
    SINGLE = "Single"
    OBJECT = "Object"
    STRING = "String"
    FILE = "File"
    DIRECTORY = "Directory"
    PROFILE = "Profile"
    DRM_CONNECTOR = "DRMConnector"
    COLOR = "Color"
    FOURCC = "FourCC"
    IMAGE = "Image"
    POSITION = "Position"
    TIME = "Time"
    DIMEN = "Dimen"
    ALIAS = "Alias"


class DeferredQuery(str, enum.Enum):
    """Lookups the completion script performs itself, at completion time."""

    PROFILES = "profiles"
    DRM_CONNECTORS = "drm_connectors"
    MONITOR_GEOMETRY = "monitor_geometry"


class StaticCandidates(BaseModel):
    """Candidate values known at generation time."""

    model_config = ConfigDict(frozen=True)

    type: Literal["static"] = "static"
    values: list[str] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def _normalize(cls, value: Iterable[Optional[str]]) -> list[str]:
        return normalize_numbers(unique(value))


class DeferredCandidates(BaseModel):
    """Candidate values resolved by the completion script via *query*."""

    model_config = ConfigDict(frozen=True)

    type: Literal["deferred"] = "deferred"
    query: DeferredQuery


Candidates = Annotated[
    Union[StaticCandidates, DeferredCandidates], Field(discriminator="type")
]


# --- Parser input ---


class OptionDescriptor(BaseModel):
    """One roster line split into its name, declared type token and tail.

    ``tail`` is the untouched remainder of the line after the name; the type
    token is its first word (``"Integer"``, ``"Choices:"``, ``"alias"`` ...).
    """

    name: str
    type_token: str
    tail: str


# --- Classification output ---


class OptionRecord(BaseModel):
    """A classified mpv option (or filter parameter).

    Records are immutable; alias resolution creates a new record carrying
    the alias name and the target's kind and candidates.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: OptionKind
    candidates: Candidates = Field(default_factory=StaticCandidates)

    @property
    def values(self) -> list[str]:
        """Static candidate values (empty for deferred candidates)."""
        if isinstance(self.candidates, StaticCandidates):
            return list(self.candidates.values)
        return []

    @property
    def deferred(self) -> Optional[DeferredQuery]:
        """The completion-time query, or ``None`` for static candidates."""
        if isinstance(self.candidates, DeferredCandidates):
            return self.candidates.query
        return None


# --- Tables ---


class FilterArgumentIndex(BaseModel):
    """Parameter schemas of filter-chain objects, two levels deep.

    ``schemas`` is keyed by chain stem (``"vf"``), then instance name
    (``"scale"``), then parameter name (``"w"``). ``families`` links every
    option of a chain family (``"vf"``, ``"vf-add"``, ``"vf-append"`` ...)
    to its stem so that all of them share one schema instance.
    """

    schemas: dict[str, dict[str, dict[str, OptionRecord]]] = Field(default_factory=dict)
    families: dict[str, str] = Field(default_factory=dict)

    def has_instance(self, stem: str, instance: str) -> bool:
        return instance in self.schemas.get(stem, {})

    def add_instance(
        self, stem: str, instance: str, parameters: dict[str, OptionRecord]
    ) -> None:
        self.schemas.setdefault(stem, {})[instance] = parameters

    def link(self, option: str, stem: str) -> None:
        self.families[option] = stem

    def parameters(self, option: str, instance: str) -> dict[str, OptionRecord]:
        """Return the parameter roster of *instance* as seen from *option*."""
        stem = self.families.get(option, option)
        return self.schemas.get(stem, {}).get(instance, {})

    def instance_parameters(self) -> Iterator[tuple[str, str, list[str]]]:
        """Yield ``(option, instance, parameter names)``, all sorted."""
        for option in sorted(self.families):
            instances = self.schemas.get(self.families[option], {})
            for instance in sorted(instances):
                yield option, instance, sorted(instances[instance])

    def parameter_candidates(self) -> Iterator[tuple[str, str, str, list[str]]]:
        """Yield ``(option, instance, parameter, candidates)``, all sorted."""
        for option, instance, names in self.instance_parameters():
            params = self.parameters(option, instance)
            for name in names:
                yield option, instance, name, params[name].values

    def __len__(self) -> int:
        return sum(len(instances) for instances in self.schemas.values())


class OptionTable(BaseModel):
    """Every classified mpv option, bucketed by :class:`OptionKind`.

    Each option name belongs to exactly one bucket; :meth:`add` moves a
    name that is already present under a different kind.
    """

    mpv_version: str = "unknown"
    buckets: dict[OptionKind, dict[str, OptionRecord]] = Field(default_factory=dict)
    filter_args: FilterArgumentIndex = Field(default_factory=FilterArgumentIndex)

    def add(self, record: OptionRecord) -> None:
        for kind, members in self.buckets.items():
            if kind != record.kind and record.name in members:
                del members[record.name]
        self.buckets.setdefault(record.kind, {})[record.name] = record

    def bucket(self, kind: OptionKind) -> dict[str, OptionRecord]:
        return self.buckets.get(kind, {})

    def find(self, name: str, include_aliases: bool = False) -> Optional[OptionRecord]:
        """Look up *name* across all kind buckets."""
        for kind, members in self.buckets.items():
            if kind == OptionKind.ALIAS and not include_aliases:
                continue
            if name in members:
                return members[name]
        return None

    def of_kind(self, *kinds: OptionKind) -> list[OptionRecord]:
        """Return the records of all given *kinds*, merged and sorted by name."""
        merged: dict[str, OptionRecord] = {}
        for kind in kinds:
            merged.update(self.bucket(kind))
        return [merged[name] for name in sorted(merged)]

    def names(self) -> list[str]:
        return sorted(name for members in self.buckets.values() for name in members)

    def counts(self) -> dict[str, int]:
        """Return the number of options per kind, keyed by kind name."""
        return {
            kind.value: len(members)
            for kind, members in sorted(self.buckets.items(), key=lambda kv: kv[0].value)
            if members
        }

    def __len__(self) -> int:
        return sum(len(members) for members in self.buckets.values())
