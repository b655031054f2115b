"""Inspect commands -- examine the classified option table.

Provides the ``mpv-bashcompgen inspect`` sub-command group with read-only
views of what the generator learned from mpv: option counts per kind, the
per-option classification and the filter parameter schemas. Every command
queries mpv exactly as ``generate`` does, so the tables show what the
completion script would contain.
"""

from __future__ import annotations

from typing import Optional

import typer

from mpvcompgen.exceptions import InvalidUsageError
from mpvcompgen.models import OptionKind, OptionRecord, OptionTable
from mpvcompgen.output import format_response, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


def _load_table(ctx: typer.Context) -> OptionTable:
    """Build the option table with the config resolved by the root callback."""
    from mpvcompgen.config import resolve_config
    from mpvcompgen.parser import build_option_table
    from mpvcompgen.source import MpvSource

    obj = ctx.find_root().obj or {}
    config = obj.get("config") or resolve_config()
    return build_option_table(MpvSource(config.mpv_cmd), config)


def _parse_kind(value: str) -> OptionKind:
    for kind in OptionKind:
        if kind != OptionKind.ALIAS and kind.value.lower() == value.lower():
            return kind
    choices = ", ".join(k.value for k in OptionKind if k != OptionKind.ALIAS)
    raise InvalidUsageError(f"Unknown option kind '{value}' (choose from: {choices})")


def _describe(record: OptionRecord) -> str:
    if record.deferred is not None:
        return f"<{record.deferred.value}>"
    return " ".join(record.values)


@inspect_app.command("summary")
def inspect_summary(ctx: typer.Context) -> None:
    """Show the mpv version and the number of options per kind.

    Example::

        mpv-bashcompgen inspect summary
        mpv-bashcompgen --json inspect summary
    """
    table = _load_table(ctx)
    format_response({
        "mpv_version": table.mpv_version,
        "options": len(table),
        "filter_instances": len(table.filter_args),
        **table.counts(),
    })


@inspect_app.command("options")
def inspect_options(
    ctx: typer.Context,
    kind: Optional[str] = typer.Option(
        None, "--kind", "-k", help="Only show options of this kind (e.g. Choice)."
    ),
) -> None:
    """List every option with its kind and completion candidates.

    Deferred candidates, which the script looks up at completion time,
    are shown in angle brackets (``<profiles>``).

    Args:
        kind: Optional kind filter, case-insensitive.

    Example::

        mpv-bashcompgen inspect options --kind Flag
    """
    kinds = [_parse_kind(kind)] if kind else [k for k in OptionKind if k != OptionKind.ALIAS]
    table = _load_table(ctx)

    rows = [
        [record.name, record.kind.value, _describe(record)]
        for record in table.of_kind(*kinds)
    ]
    if not rows:
        info("No options of that kind.")
        return

    get_output().print_table(
        ["Option", "Kind", "Candidates"], rows, title=f"Options ({len(rows)})"
    )


@inspect_app.command("filters")
def inspect_filters(
    ctx: typer.Context,
    option: Optional[str] = typer.Option(
        None, "--option", help="Only show instances reachable from this option (e.g. vf)."
    ),
) -> None:
    """List filter instances and the parameters each accepts.

    Args:
        option: Restrict the table to one chain option.

    Example::

        mpv-bashcompgen inspect filters --option af
    """
    table = _load_table(ctx)
    index = table.filter_args

    rows: list[list[str]] = []
    for name, instance, params in index.instance_parameters():
        if option and name != option:
            continue
        rows.append([name, instance, " ".join(params)])

    if not rows:
        info("No filter parameters found.")
        return

    get_output().print_table(
        ["Option", "Instance", "Parameters"], rows, title=f"Filter instances ({len(rows)})"
    )
