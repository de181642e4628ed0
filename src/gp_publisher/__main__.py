"""Module entrypoint for ``python -m gp_publisher``."""

from __future__ import annotations

from gp_publisher.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
