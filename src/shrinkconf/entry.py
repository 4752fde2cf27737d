"""Console script entry point wired with production services."""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the ``shrinkconf`` console script and return its exit code."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
