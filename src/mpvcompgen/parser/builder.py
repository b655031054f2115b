"""Assemble the complete :class:`~mpvcompgen.models.OptionTable` from mpv.

This is the first half of the pipeline: everything the completion script
needs is collected here, strictly in this order, one blocking query at a
time:

1. ``mpv --version`` for the script header.
2. ``mpv --demuxer-rawvideo-mp-format=help`` for ``Image`` candidates.
3. ``mpv --list-options``, parsed and classified line by line (with the
   per-option ``--<name>=help`` lookups the classifier issues).
4. Filter-chain expansion (``mpv --vf <instance>=help`` ...).
5. Alias resolution.

Any :class:`~mpvcompgen.exceptions.SourceReadError` propagates unchanged;
nothing is emitted from a partially built table.
"""

from __future__ import annotations

from mpvcompgen.config import GeneratorConfig
from mpvcompgen.models import OptionTable
from mpvcompgen.output import debug
from mpvcompgen.parser.aliases import resolve_aliases
from mpvcompgen.parser.classifier import TypeClassifier
from mpvcompgen.parser.descriptor import iter_descriptors
from mpvcompgen.parser.expander import ObjectExpander
from mpvcompgen.source import MpvSource


def build_option_table(source: MpvSource, config: GeneratorConfig) -> OptionTable:
    """Query mpv through *source* and return the finished option table.

    Args:
        source: The mpv query interface.
        config: Generator settings (chain namespaces to expand).

    Returns:
        An :class:`OptionTable` without Alias records, with its
        ``filter_args`` populated.

    Raises:
        SourceReadError: If a required mpv query fails.
    """
    table = OptionTable(mpv_version=source.version())
    video_formats = source.raw_video_formats()
    classifier = TypeClassifier(source, video_formats)

    for descriptor in iter_descriptors(source.list_options()):
        table.add(classifier.classify_descriptor(descriptor))

    ObjectExpander(source, video_formats, config.namespaces).expand(table)
    resolve_aliases(table)
    report_categories(table)
    return table


def report_categories(table: OptionTable) -> None:
    """Write the per-kind option counts to the debug trace."""
    lines = [f"Found {len(table)} options:"]
    lines.extend(f" {kind}: {count}" for kind, count in table.counts().items())
    debug("\n".join(lines))
