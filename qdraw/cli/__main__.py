"""
Main entry point for the Qdraw CLI when run as a module.

This allows the CLI to be executed using:
    python -m qdraw.cli

or the equivalent ``qdraw`` console script.
"""

import sys

from . import main

if __name__ == '__main__':
    sys.exit(main())
