"""CLI package."""

from mcsm.cli.app import app

__all__ = ["app"]
