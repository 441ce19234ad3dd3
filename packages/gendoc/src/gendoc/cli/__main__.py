"""
Entry point for running the CLI as a module.

This allows the CLI to be executed with:
    python -m gendoc.cli
"""

from . import main

if __name__ == "__main__":
    main()
