"""
CLI entry point for notedown.

This allows the tool to be run as:
    python -m notedown render notes.md --cursor 12
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
