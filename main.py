"""
ncparse command-line entry point.
"""

import sys
from pathlib import Path

# Ensure project root is on path when running as python main.py
_root = Path(__file__).resolve().parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from ncparse.cli import main


if __name__ == "__main__":
    sys.exit(main())
