"""
Main entry point script for AutoViz.

This script serves as the executable entry point when running
AutoViz from the command line.
"""

import sys
from autoviz.main import main

if __name__ == "__main__":
    sys.exit(main())
