"""Allow ``python -m sharecell`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m sharecell`` behaves identically to the ``sharecell``
console script.
"""

from __future__ import annotations

from sharecell.cli.app import cli

if __name__ == "__main__":
    cli()
