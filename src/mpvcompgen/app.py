"""Typer application and CLI entry point for mpv-bashcompgen.

This module wires together the top-level Typer application: a root
callback holding the global options, the ``generate`` command (also run
when no command is given) and the ``inspect`` sub-command group.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~mpvcompgen.exceptions.CompgenError` is reported on stderr and
mapped to its exit code; any other exception is written to a crash log
under the data directory.

See Also:
    :mod:`mpvcompgen.config`: Environment and flag resolution.
    :mod:`mpvcompgen.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from mpvcompgen import __version__
from mpvcompgen.config import GeneratorConfig, resolve_config
from mpvcompgen.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="mpv-bashcompgen",
    help="Generate a bash completion script for mpv from mpv's own option listing.",
    no_args_is_help=False,
    add_completion=False,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Sub-commands
# ------------------------------------------------------------------ #

from mpvcompgen.commands.inspect import inspect_app  # noqa: E402

app.add_typer(inspect_app, name="inspect", help="Inspect the classified option table.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"mpv-bashcompgen {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    mpv_cmd: Optional[str] = typer.Option(
        None, "--mpv-cmd", help="mpv binary to query (default: $MPV_BASHCOMPGEN_MPV_CMD or mpv)."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format for inspect commands."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output for inspect commands."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Trace option classification on stderr."
    ),
    media_glob: bool = typer.Option(
        False, "--media-glob", help="Complete only media files by default."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the script to this file instead of stdout."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Resolves the :class:`~mpvcompgen.config.GeneratorConfig`, initialises
    the global :class:`~mpvcompgen.output.OutputManager` and stores the
    config in the Typer context for the sub-commands. Without a sub-command
    the completion script is generated.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        mpv_cmd: mpv binary override (highest precedence).
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable the debug trace.
        media_glob: Start the fallback file completion restricted to media files.
        output_file: Redirect primary output to a file path.
    """
    from mpvcompgen.output import OutputFormat, OutputManager, set_output

    config = resolve_config(
        cli_mpv_cmd=mpv_cmd,
        cli_verbose=verbose,
        cli_media_glob=media_glob or None,
    )

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=config.verbose,
        output_file=output_file,
    )
    set_output(output)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is None:
        _generate(config)


@app.command("generate")
def generate_command(ctx: typer.Context) -> None:
    """Query mpv and print the bash completion script.

    This is also what runs when no command is given.

    Example::

        mpv-bashcompgen > /usr/share/bash-completion/completions/mpv
        mpv-bashcompgen --mpv-cmd /opt/mpv/bin/mpv generate -o mpv.bash
    """
    _generate(ctx.obj["config"])


def _generate(config: GeneratorConfig) -> None:
    """Build the option table and write the rendered script.

    Nothing is written unless both stages succeed.
    """
    from mpvcompgen.generator import generate_script
    from mpvcompgen.output import success, write_artifact
    from mpvcompgen.parser import build_option_table
    from mpvcompgen.source import MpvSource

    source = MpvSource(config.mpv_cmd)
    table = build_option_table(source, config)
    script = generate_script(table, command=config.mpv_cmd, media_glob=config.media_glob)
    write_artifact(script)
    success(f"Generated completion for {len(table)} options (mpv {table.mpv_version})")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from mpvcompgen.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``mpv-bashcompgen`` console script.

    Unhandled :class:`~mpvcompgen.exceptions.CompgenError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from mpvcompgen.exceptions import CompgenError
        from mpvcompgen.output import error

        if isinstance(exc, CompgenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
