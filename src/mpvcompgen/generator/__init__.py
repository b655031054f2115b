"""Bash completion script generation.

Renders an :class:`~mpvcompgen.models.OptionTable` into a self-contained
bash script through a Jinja2 template.
"""

from mpvcompgen.generator.script import build_context, generate_script

__all__ = ["build_context", "generate_script"]
