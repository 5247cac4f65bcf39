"""Entry point of the airule command."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .app import App, AppError
from .cli import CLIError, parse_args


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    cli_args = parse_args(argv)
    try:
        cli_args.validate()
    except CLIError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        App(cli_args).run()
    except AppError as exc:
        print(f"Error executing command: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())