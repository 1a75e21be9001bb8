"""Entry point shim for `python -m git_gps`."""

from __future__ import annotations

from git_gps.cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
