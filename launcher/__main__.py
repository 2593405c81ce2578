"""Executable shim so `python -m launcher` runs the CLI."""

from __future__ import annotations

from launcher.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
