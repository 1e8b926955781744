"""
Entry point for running the CLI as a module.

Usage:
    python -m movie_db <command>
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
