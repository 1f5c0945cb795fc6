"""
Console-script entry point.

The CLI reports its own domain errors and sets exit codes through typer.
Anything that still escapes here is a bug or an interrupt.
"""

import logging
import sys

from rich.console import Console

from alfred_caniuse.cli.app import app
from alfred_caniuse.cli.formatters import format_error_with_suggestions

log = logging.getLogger("alfred_caniuse")

# Conventional exit status for SIGINT
EXIT_INTERRUPTED = 130


def main() -> None:
    console = Console(stderr=True)
    try:
        app()
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted.[/yellow]")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        log.debug("Full traceback:", exc_info=True)
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
