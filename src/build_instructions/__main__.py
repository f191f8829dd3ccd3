"""build-instructions CLI entry point."""

from __future__ import annotations

from build_instructions.cli import app

if __name__ == "__main__":
    app()
