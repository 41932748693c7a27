"""python -m sqlite_smoke"""

import sys

from sqlite_smoke.cli import main

if __name__ == "__main__":
    sys.exit(main())
