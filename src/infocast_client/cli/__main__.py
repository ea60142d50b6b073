"""
infocast_client.cli.__main__

Entrypoint for running the CLI via `python -m infocast_client.cli` or `infocast`.
"""

from __future__ import annotations

import asyncio
import sys

from infocast_client.cli.commands import run


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
