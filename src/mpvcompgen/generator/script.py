"""Render the bash completion script from a finished option table.

This is the second half of the pipeline. :func:`build_context` flattens an
:class:`~mpvcompgen.models.OptionTable` into plain strings and tuples, and
:func:`generate_script` renders ``templates/bash_completion.sh.j2`` with
it. The script has a fixed layout:

1. Header with the mpv version the table was read from.
2. Lookup tables: ``_mpv_fargs`` (parameters per filter) and ``_mpv_pargs``
   (candidates per filter parameter), plus the media glob settings.
3. Static helper functions (profile, DRM connector and monitor lookups,
   filter chain completion).
4. The ``_mpv`` completion function, whose ``case`` blocks are generated
   per option kind, and the ``complete`` registration.

Option names and candidates are emitted in sorted order, so two runs over
the same mpv produce identical scripts. Candidates are escaped for the
quoting context they land in.
"""

from __future__ import annotations

import os
import re
import shlex
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError as JinjaTemplateError

from mpvcompgen.exceptions import TemplateError
from mpvcompgen.models import OptionKind, OptionTable


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""

SCRIPT_TEMPLATE = "bash_completion.sh.j2"

MEDIA_GLOBEXPR = (
    "@(mp?(e)g|MP?(E)G|wm[av]|WM[AV]|avi|AVI|asf|ASF|vob|VOB|bin|BIN|dat|DAT"
    "|vcd|VCD|ps|PS|pes|PES|fl[iv]|FL[IV]|fxm|FXM|viv|VIV|rm?(j)|RM?(J)"
    "|ra?(m)|RA?(M)|yuv|YUV|mov|MOV|qt|QT|mp[234]|MP[234]|m4[av]|M4[AV]"
    "|og[gmavx]|OG[GMAVX]|w?(a)v|W?(A)V|dump|DUMP|mk[av]|MK[AV]|m4a|M4A"
    "|aac|AAC|m[24]v|M[24]V|dv|DV|rmvb|RMVB|mid|MID|t[ps]|T[PS]|3g[p2]"
    "|3gpp?(2)|mpc|MPC|flac|FLAC|vro|VRO|divx|DIVX|aif?(f)|AIF?(F)"
    "|m2t?(s)|M2T?(S)|vdr|VDR|xvid|XVID|ape|APE|gif|GIF|nut|NUT|bik|BIK"
    "|webm|WEBM|amr|AMR|awb|AWB|iso|ISO|opus|OPUS)?(.part)"
)
"""Extended glob matching media file names, used for the file fallback."""

# Kinds completed from their static candidate list after the previous word
STATIC_KINDS = (
    OptionKind.OBJECT,
    OptionKind.NUMERIC,
    OptionKind.COLOR,
    OptionKind.FOURCC,
    OptionKind.IMAGE,
    OptionKind.STRING,
    OptionKind.POSITION,
    OptionKind.TIME,
)

_OBJARG_RE = re.compile(r"^[av][fo]")


def single_quoted(text: str) -> str:
    """Escape *text* for use inside a single-quoted bash string."""
    return text.replace("'", "'\\''")


def double_quoted(text: str) -> str:
    """Escape *text* for use inside a double-quoted bash string."""
    for char in ("\\", '"', "$", "`"):
        text = text.replace(char, "\\" + char)
    return text


def _alternation(names: list[str]) -> str:
    return "|".join(f"--{name}" for name in names)


def build_context(table: OptionTable, command: str = "mpv", media_glob: bool = False) -> dict:
    """Build the template context for *table*.

    Besides rendering, the context is what ``inspect`` style consumers and
    tests look at: every value in it is a plain string, list or tuple.

    Args:
        table: The finished option table (aliases resolved).
        command: The mpv command the script registers completion for;
            only its basename is used.
        media_glob: Whether the fallback file completion starts restricted
            to :data:`MEDIA_GLOBEXPR`.

    Returns:
        A dict of template variables.
    """
    all_options: list[str] = []

    value_cases: list[tuple[str, str]] = []
    for record in table.of_kind(OptionKind.CHOICE, OptionKind.FLAG):
        words = " ".join(f"--{record.name}={value}" for value in record.values)
        value_cases.append((record.name, words))
        all_options.append(f"--{record.name}=")

    objarg_cases: list[tuple[str, str]] = []
    for record in table.of_kind(OptionKind.OBJECT):
        if _OBJARG_RE.match(record.name):
            words = " ".join(shlex.quote(value) for value in record.values)
            objarg_cases.append((record.name, words))

    patterns: dict[str, str] = {}
    for key, kind in (
        ("file_pattern", OptionKind.FILE),
        ("profile_pattern", OptionKind.PROFILE),
        ("drm_pattern", OptionKind.DRM_CONNECTOR),
        ("directory_pattern", OptionKind.DIRECTORY),
    ):
        names = sorted(table.bucket(kind))
        patterns[key] = _alternation(names)
        all_options.extend(f"--{name}" for name in names)

    static_cases: list[tuple[str, str]] = []
    for record in table.of_kind(*STATIC_KINDS):
        static_cases.append((record.name, " ".join(sorted(record.values))))
        all_options.append(f"--{record.name}")

    dimen_options = [record.name for record in table.of_kind(OptionKind.DIMEN)]
    all_options.extend(f"--{name}" for name in dimen_options)
    all_options.extend(f"--{record.name}" for record in table.of_kind(OptionKind.SINGLE))

    fargs: list[tuple[str, str]] = []
    for option, instance, names in table.filter_args.instance_parameters():
        if names:
            fargs.append((f"{option}@{instance}", " ".join(f"{name}=" for name in names)))

    pargs: list[tuple[str, str]] = []
    for option, instance, name, values in table.filter_args.parameter_candidates():
        if values:
            pargs.append((f"{option}@{instance}@{name}", " ".join(values)))

    return {
        "mpv_version": table.mpv_version,
        "command_name": os.path.basename(command) or "mpv",
        "use_media_glob": 1 if media_glob else 0,
        "media_globexpr": MEDIA_GLOBEXPR,
        "fargs": fargs,
        "pargs": pargs,
        "value_cases": value_cases,
        "objarg_cases": objarg_cases,
        "static_cases": static_cases,
        "dimen_options": dimen_options,
        "all_options": " ".join(all_options),
        **patterns,
    }


def generate_script(table: OptionTable, command: str = "mpv", media_glob: bool = False) -> str:
    """Render the complete bash completion script for *table*.

    Raises:
        TemplateError: If the script template cannot be loaded or rendered.
    """
    env = _create_jinja_env()
    context = build_context(table, command=command, media_glob=media_glob)
    try:
        template = env.get_template(SCRIPT_TEMPLATE)
        return template.render(**context)
    except JinjaTemplateError as exc:
        raise TemplateError(f"Cannot render {SCRIPT_TEMPLATE}: {exc}") from exc


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for the script template.

    Autoescape stays off: the output is shell, and quoting is applied
    per context through the ``sq`` and ``dq`` filters.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["sq"] = single_quoted
    env.filters["dq"] = double_quoted
    return env
