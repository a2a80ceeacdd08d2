"""Allow ``python -m ytd_pick`` invocation."""

from __future__ import annotations

from ytd_pick.cli.app import cli

if __name__ == "__main__":
    cli()
