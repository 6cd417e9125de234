"""Command-line entry point for did-it-run."""

from diditrun.cli.main import app, main

__all__ = ["app", "main"]
