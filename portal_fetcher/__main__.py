"""
Main entry point for the portal_fetcher package.

Allows running the fetcher as: python -m portal_fetcher
"""

from portal_fetcher.cli import main

if __name__ == "__main__":
    main()
