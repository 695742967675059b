"""
Samwise CLI entry point.

Usage:
    sam                               # List capabilities
    sam hello                         # Check the pipeline
    sam calendar-sync                 # Today's events -> Todoist tasks
    sam calendar-recommendations      # Which areas got time today
    sam --config other.yaml hello     # Use another config file
"""

from __future__ import annotations

import sys

from dotenv import load_dotenv

from samwise.capabilities import builtin_capabilities
from samwise.cli.router import Router

# Windows UTF-8 encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the exit code."""
    # Real environment variables take precedence over .env
    load_dotenv(override=False)

    router = Router(builtin_capabilities())
    return router.run(sys.argv[1:] if argv is None else argv)


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
