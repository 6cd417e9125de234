"""Shared helpers for did-it-run."""

from diditrun.common.logging import configure_logging

__all__ = ["configure_logging"]
