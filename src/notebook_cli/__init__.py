"""Keeps plain-text notes in a folder tree under ``~/.notes``.

If you installed via ``pip``, run ``notebook`` with no arguments to get help.
Or, run ``python3 -m notebook_cli``.

To use the Python API, look at :class:`notebook_cli.api.Notebook`
"""
