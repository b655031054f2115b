"""Classify option descriptors into :class:`~mpvcompgen.models.OptionRecord` objects.

Classification runs in two stages:

1. **Name overrides** -- :data:`OVERRIDE_RULES` is an ordered table of
   ``(predicate, forced token)`` pairs evaluated top to bottom; the first
   predicate that accepts the option name replaces the declared type token.
   mpv labels several object-valued options as ``String``, and a few options
   need their values looked up live (profiles, DRM connectors).
2. **Token dispatch** -- :data:`_TOKEN_HANDLERS` maps the (possibly forced)
   type token to a handler returning the kind and candidate list. Unknown
   tokens fall back to :attr:`~mpvcompgen.models.OptionKind.SINGLE`.

``Object`` and ``ExpandableChoice`` handlers query mpv for the option's
value list. Those live queries are disabled for filter parameters (see
:class:`~mpvcompgen.parser.expander.ObjectExpander`), which are never
themselves expanded.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Optional, Union

from mpvcompgen.models import (
    DeferredCandidates,
    DeferredQuery,
    OptionDescriptor,
    OptionKind,
    OptionRecord,
    StaticCandidates,
)
from mpvcompgen.output import debug
from mpvcompgen.parser.values import (
    extract_alias_target,
    extract_choices,
    extract_default,
    extract_range,
    has_no_cfg,
    wants_directory,
    wants_file,
)
from mpvcompgen.source import MpvSource

CandidateSpec = Union[list[Optional[str]], DeferredCandidates]
Handler = Callable[["TypeClassifier", str, str], tuple[OptionKind, CandidateSpec]]


def _named(*names: str) -> Callable[[str], bool]:
    members = frozenset(names)
    return lambda name: name in members


OVERRIDE_RULES: list[tuple[Callable[[str], bool], str]] = [
    # Declared as String although the value names an object
    (
        _named(
            "opengl-backend",
            "opengl-hwdec-interop",
            "audio-demuxer",
            "cscale-window",
            "demuxer",
            "dscale",
            "dscale-window",
            "scale-window",
            "sub-demuxer",
        ),
        "Object",
    ),
    (_named("audio-spdif"), "ExpandableChoice"),
    (lambda name: name.startswith("profile") or name == "show-profile", "Profile"),
    (_named("drm-connector"), "DRMConnector"),
    # Codec and format listings
    (_named("ad", "vd", "oac", "ovc"), "Object"),
]
"""Ordered name overrides; the first matching predicate wins."""

COLOR_SAMPLES = ["#ffffff", "1.0/1.0/1.0/1.0"]
FOURCC_CODES = ["YV12", "UYVY", "YUY2", "I420", "other"]
MSG_LEVELS = ["no", "fatal", "error", "warn", "info", "status", "v", "debug", "trace"]
POSITION_SAMPLES = ["-60", "60", "50%"]
TIME_SAMPLES = ["00:00:00"]

_HELP_NOISE_RES = (
    re.compile(r"^Available"),
    re.compile(r"^\s+\(other"),
    re.compile(r"^\s+demuxer:"),
)
_HELP_ENTRY_RE = re.compile(r"^\s+(\S+)")
_FLAG_VALUE_RE = re.compile(r"^--[^=]+=(.*)$")
_HELP_CHOICES_RE = re.compile(r"^Choices: (\S+)")


def apply_overrides(name: str, type_token: str) -> str:
    """Return the type token to dispatch on after name overrides."""
    for predicate, forced in OVERRIDE_RULES:
        if predicate(name):
            return forced
    return type_token


class TypeClassifier:
    """Map descriptors to option records.

    Args:
        source: mpv query interface for ``Object`` and ``ExpandableChoice``
            lookups. May be ``None`` when *live_queries* is off.
        video_formats: Pixel formats offered for ``Image`` options, fetched
            once per run by the caller.
        live_queries: Whether handlers may query mpv. Filter parameters are
            classified with this disabled.
    """

    def __init__(
        self,
        source: Optional[MpvSource],
        video_formats: Sequence[str] = (),
        live_queries: bool = True,
    ) -> None:
        if live_queries and source is None:
            raise ValueError("live queries need an MpvSource")
        self.source = source
        self.video_formats = list(video_formats)
        self.live_queries = live_queries

    def classify(self, name: str, tail: str) -> OptionRecord:
        """Classify one option from its name and descriptor tail."""
        words = tail.split(None, 1)
        token = apply_overrides(name, words[0] if words else "")
        handler = _TOKEN_HANDLERS.get(token, _single)
        kind, spec = handler(self, name, tail)

        if isinstance(spec, DeferredCandidates):
            record = OptionRecord(name=name, kind=kind, candidates=spec)
        else:
            record = OptionRecord(
                name=name, kind=kind, candidates=StaticCandidates(values=spec)
            )
        debug(f" + {name} :: {kind.value} -> [{' '.join(record.values)}]")
        return record

    def classify_descriptor(self, descriptor: OptionDescriptor) -> OptionRecord:
        return self.classify(descriptor.name, descriptor.tail)

    # ------------------------------------------------------------------ #
    # Live lookups
    # ------------------------------------------------------------------ #

    def expand_object(self, name: str) -> list[str]:
        """List the object names ``--<name>=help`` offers."""
        if not self.live_queries:
            return []
        assert self.source is not None
        values: list[str] = []
        for line in self.source.option_help(name):
            if any(regex.match(line) for regex in _HELP_NOISE_RES):
                continue
            match = _HELP_ENTRY_RE.match(line)
            if not match:
                continue
            value = match.group(1)
            flag = _FLAG_VALUE_RE.match(value)
            if flag:
                debug(f" ! {name} :: {value} -> {flag.group(1)}")
                value = flag.group(1)
            values.append(value)
        return values

    def expand_choice(self, name: str) -> list[str]:
        """List the ``Choices: a,b,c`` values ``--<name>=help`` offers."""
        if not self.live_queries:
            return []
        assert self.source is not None
        values: list[str] = []
        for line in self.source.option_help(name):
            match = _HELP_CHOICES_RE.match(line)
            if match:
                choices = [c for c in match.group(1).split(",") if c]
                for choice in choices:
                    debug(f" + {name} += [{choice}]")
                values.extend(choices)
        return values


# ---------------------------------------------------------------------- #
# Token handlers
# ---------------------------------------------------------------------- #


def _numeric(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.NUMERIC, [extract_default(tail), extract_range(tail)]


def _flag(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    if has_no_cfg(tail) or name.startswith("no-") or name in ("{", "}"):
        return OptionKind.SINGLE, []
    return OptionKind.FLAG, ["yes", "no", extract_default(tail)]


def _audio(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.STRING, [extract_default(tail), extract_range(tail)]


def _choices(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.CHOICE, [
        extract_range(tail),
        extract_default(tail),
        *extract_choices(tail),
    ]


def _expandable_choice(
    clf: TypeClassifier, name: str, tail: str
) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.CHOICE, list(clf.expand_choice(name))


def _color(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.COLOR, list(COLOR_SAMPLES)


def _fourcc(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.FOURCC, list(FOURCC_CODES)


def _image(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.IMAGE, list(clf.video_formats)


def _int_range(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.NUMERIC, ["j-k"]


def _key_value(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.STRING, []


def _object(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.OBJECT, list(clf.expand_object(name))


def _output(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.STRING, [f"all={level}" for level in MSG_LEVELS]


def _relative(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.POSITION, list(POSITION_SAMPLES)


def _string(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    if wants_file(name, tail):
        if wants_directory(name):
            return OptionKind.DIRECTORY, []
        return OptionKind.FILE, []
    return OptionKind.STRING, [extract_default(tail)]


def _time(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.TIME, list(TIME_SAMPLES)


def _window(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.DIMEN, DeferredCandidates(query=DeferredQuery.MONITOR_GEOMETRY)


def _profile(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.PROFILE, DeferredCandidates(query=DeferredQuery.PROFILES)


def _drm_connector(
    clf: TypeClassifier, name: str, tail: str
) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.DRM_CONNECTOR, DeferredCandidates(query=DeferredQuery.DRM_CONNECTORS)


def _alias(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.ALIAS, [extract_alias_target(tail) or ""]


def _single(clf: TypeClassifier, name: str, tail: str) -> tuple[OptionKind, CandidateSpec]:
    return OptionKind.SINGLE, []


_TOKEN_HANDLERS: dict[str, Handler] = {
    "Integer": _numeric,
    "Double": _numeric,
    "Float": _numeric,
    "Integer64": _numeric,
    "Flag": _flag,
    "Audio": _audio,
    "Choices:": _choices,
    "ExpandableChoice": _expandable_choice,
    "Color": _color,
    "FourCC": _fourcc,
    "Image": _image,
    "Int[-Int]": _int_range,
    "Key/value": _key_value,
    "Object": _object,
    "Output": _output,
    "Relative": _relative,
    "String": _string,
    "Time": _time,
    "Window": _window,
    "Profile": _profile,
    "DRMConnector": _drm_connector,
    "alias": _alias,
}
