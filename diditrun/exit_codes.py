"""Process exit codes used by the command line entry point."""

SUCCESS = 0
FAILURE = 1
USAGE = 2
# sysexits.h EX_CONFIG
CONFIG = 78
SIGNAL_BASE = 128
