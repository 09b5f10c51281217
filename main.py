#!/usr/bin/env python3
"""skim - a terminal viewer for text files.

Usage:
    python main.py PATH

Controls:
    Arrow keys: Move the cursor
    q, Ctrl-Q: Quit
"""

import sys
from skim.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
