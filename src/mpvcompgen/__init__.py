"""mpvcompgen -- Generate bash completion scripts for the mpv media player.

This package queries an installed ``mpv`` binary for its option metadata,
classifies every option into a completion *kind*, expands the parameter
schemas of filter-chain options (``--vf``, ``--af`` ...) and renders a
self-contained bash completion script driven by embedded lookup tables.

Typical workflow::

    mpv-bashcompgen > ~/.local/share/bash-completion/completions/mpv
    mpv-bashcompgen inspect summary   # what was found, per kind

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for option records and the option table.
    config: Environment-aware generator configuration.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr output discipline with Rich support.
"""

__version__ = "0.3.0"
