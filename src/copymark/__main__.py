# topmark:header:start
#
#   project      : CopyMark
#   file         : __main__.py
#   file_relpath : src/copymark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running CopyMark via ``python -m copymark``.

Delegates directly to :func:`copymark.cli.main.cli`, so the module interface
and the ``copymark`` console script behave identically.

Examples:
    Check the current directory::

        python -m copymark check .
"""

from __future__ import annotations

from copymark.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
