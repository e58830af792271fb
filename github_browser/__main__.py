"""Entry point for running as a module: python -m github_browser."""

import sys

from github_browser.cli import main

if __name__ == "__main__":
    sys.exit(main())
