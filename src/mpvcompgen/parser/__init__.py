"""mpv option roster parser -- descriptors, classification, expansion, aliases.

This sub-package is the first half of the pipeline: turning the text mpv
prints about its options into an :class:`~mpvcompgen.models.OptionTable`
that the script generator can consume.

Typical usage::

    from mpvcompgen.parser import build_option_table
    from mpvcompgen.source import MpvSource

    table = build_option_table(MpvSource("mpv"), GeneratorConfig())

Sub-modules:

* :mod:`~mpvcompgen.parser.descriptor` -- split roster lines into
  name, type token and tail.
* :mod:`~mpvcompgen.parser.values` -- defaults, ranges and choices
  extracted from tails.
* :mod:`~mpvcompgen.parser.classifier` -- override rules and type-token
  dispatch producing option records.
* :mod:`~mpvcompgen.parser.expander` -- parameter schemas of filter-chain
  objects.
* :mod:`~mpvcompgen.parser.aliases` -- alias resolution.
* :mod:`~mpvcompgen.parser.builder` -- runs all of the above in order.
"""

from mpvcompgen.parser.builder import build_option_table
from mpvcompgen.parser.classifier import TypeClassifier
from mpvcompgen.parser.descriptor import iter_descriptors, parse_descriptor

__all__ = ["build_option_table", "TypeClassifier", "iter_descriptors", "parse_descriptor"]
