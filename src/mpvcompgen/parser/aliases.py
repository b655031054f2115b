"""Rewrite alias options to the classification of the option they alias.

``mpv --list-options`` reports aliases as ``--fs  alias for --fullscreen``.
The classifier files those under :attr:`~mpvcompgen.models.OptionKind.ALIAS`
with the target name as their only candidate. :func:`resolve_aliases`
replaces every such record with a copy of its target's record (same kind,
same candidates, alias name), following alias-to-alias chains, and then
discards the Alias bucket. Aliases whose target does not exist are dropped.
"""

from __future__ import annotations

from typing import Optional

from mpvcompgen.models import OptionKind, OptionRecord, OptionTable
from mpvcompgen.output import debug


def _alias_target(record: OptionRecord) -> str:
    values = record.values
    return values[-1] if values else ""


def _follow(target: str, table: OptionTable) -> Optional[OptionRecord]:
    """Find the non-alias record *target* ultimately points to."""
    aliases = table.bucket(OptionKind.ALIAS)
    seen: set[str] = set()
    while target in aliases and target not in seen:
        seen.add(target)
        target = _alias_target(aliases[target])
    return table.find(target)


def resolve_aliases(table: OptionTable) -> OptionTable:
    """Resolve every Alias record in *table* in place and return it.

    Afterwards the table holds no Alias bucket; each resolved alias carries
    its target's kind and candidate list.
    """
    aliases = table.buckets.pop(OptionKind.ALIAS, {})
    staging = OptionTable(buckets={**table.buckets, OptionKind.ALIAS: aliases})

    for name in sorted(aliases):
        target = _alias_target(aliases[name])
        resolved = _follow(target, staging)
        if resolved is None:
            debug(f" - {name} is an alias of unknown option '{target}', dropped")
            continue
        debug(f" * {name} is an alias of {resolved.kind.value}[{resolved.name}]")
        table.add(resolved.model_copy(update={"name": name}))

    return table


def resolve_parameter_aliases(parameters: dict[str, OptionRecord]) -> dict[str, OptionRecord]:
    """Resolve aliases inside one filter's parameter roster.

    Returns a new mapping in the original order, without unresolved aliases.
    """
    table = OptionTable()
    for record in parameters.values():
        table.add(record)
    resolve_aliases(table)
    resolved = {name: table.find(name) for name in parameters}
    return {name: record for name, record in resolved.items() if record is not None}
