"""
Main entry point for running the package as a module.

Usage:
    python -m photoprep prepare [source_dir] [output_dir] [manifest_file]
    python -m photoprep upload [input_dir] [prefix]
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
