"""Main entry point when executing holybible as a package.

This allows running the package using python -m holybible.
"""

from holybible.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
