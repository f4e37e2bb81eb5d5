"""
Module execution entry point.

Allows running with: python -m foundation_cli
"""

import sys
from foundation_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
