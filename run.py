#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Usage:
    python run.py [--rows N] [--cols N] [--save-file PATH] [--debug] [play|show]
"""

import sys

from connect_four.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
