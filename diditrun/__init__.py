"""
did-it-run: run a command and get told how it went.

The wrapped command runs to completion; its exit code and duration are then
delivered through the configured channels (desktop toast, email).
"""

__version__ = "0.1.0"
