"""Allow `python -m notificationparser`."""

import sys

from notificationparser.interface.cli import main

if __name__ == "__main__":
    sys.exit(main())
