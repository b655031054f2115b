"""Expand filter-chain objects into per-parameter schemas.

Options such as ``--vf`` take a chain of objects, each with its own
parameters: ``--vf=scale=w=1280:h=-2,format=fmt=yuv420p``. To complete
inside such a chain the generator needs, for every object mpv offers, the
parameter roster printed by ``mpv --vf scale=help``.

:class:`ObjectExpander` walks the Object options of the recognised chain
namespaces, queries each ``(stem, instance)`` pair once, classifies the
parameters with live queries disabled and stores them in a
:class:`~mpvcompgen.models.FilterArgumentIndex`. Options of one family
(``vf``, ``vf-add``, ``vf-append`` ...) share the stem's schema instead of
re-querying mpv.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from mpvcompgen.models import FilterArgumentIndex, OptionKind, OptionRecord, OptionTable
from mpvcompgen.output import debug
from mpvcompgen.parser.aliases import resolve_parameter_aliases
from mpvcompgen.parser.classifier import TypeClassifier
from mpvcompgen.parser.descriptor import iter_parameter_descriptors
from mpvcompgen.source import MpvSource


def chain_stem(name: str) -> str:
    """Return the chain family of an option name (``"vf-add"`` -> ``"vf"``)."""
    return name.split("-", 1)[0]


class ObjectExpander:
    """Build the filter-argument index of an option table.

    Args:
        source: mpv query interface for the per-object parameter rosters.
        video_formats: Pixel formats for ``Image`` parameters.
        namespaces: Chain stems to expand (``vf``, ``af``, ``vo``, ``ao``).
    """

    def __init__(
        self,
        source: MpvSource,
        video_formats: Sequence[str] = (),
        namespaces: Iterable[str] = ("vf", "af", "vo", "ao"),
    ) -> None:
        self.source = source
        self.namespaces = frozenset(namespaces)
        self._classifier = TypeClassifier(None, video_formats, live_queries=False)

    def is_chain_option(self, name: str) -> bool:
        return chain_stem(name) in self.namespaces

    def expand(self, table: OptionTable) -> FilterArgumentIndex:
        """Populate and return ``table.filter_args``."""
        index = table.filter_args
        for record in table.of_kind(OptionKind.OBJECT):
            if not self.is_chain_option(record.name):
                continue
            stem = chain_stem(record.name)
            for instance in record.values:
                if not index.has_instance(stem, instance):
                    index.add_instance(stem, instance, self.parameters(stem, instance))
                index.link(record.name, stem)
        debug(f"Expanded {len(index)} filter instances")
        return index

    def parameters(self, stem: str, instance: str) -> dict[str, OptionRecord]:
        """Query and classify the parameter roster of one object instance."""
        lines = self.source.object_parameters(stem, instance)
        parameters: dict[str, OptionRecord] = {}
        for descriptor in iter_parameter_descriptors(lines):
            parameters[descriptor.name] = self._classifier.classify_descriptor(descriptor)
        return resolve_parameter_aliases(parameters)
