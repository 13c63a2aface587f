"""Entry point for ``python -m unsent_archive``."""

import sys

from unsent_archive.cli import main

if __name__ == "__main__":
    sys.exit(main())
