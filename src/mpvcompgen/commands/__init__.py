"""Built-in CLI sub-commands for mpv-bashcompgen.

* :mod:`~mpvcompgen.commands.inspect` -- view the classified option table
  and filter parameter schemas without generating a script.

The ``generate`` command itself lives on the root app in
:mod:`mpvcompgen.app`.
"""
