"""
pixconv package entry point.

Supports:
  - python -m pixconv [args...]
"""

from __future__ import annotations

from typing import List

from .cli import cli


def main(argv: List[str] | None = None) -> None:
    cli.main(args=argv, prog_name="pixconv")


if __name__ == "__main__":
    main()
