#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Examples:

    # Two players at one keyboard
    python run.py play

    # Play in the browser at http://127.0.0.1:5000/
    python run.py serve --port 5000

    # Evaluate a position (column 0 holds four tokens of the first player)
    python run.py check --position 1,1,1,1,0,0,2,2,2,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0

    # Time 5000 random games with debug output
    python run.py --debug benchmark --iterations 5000
"""

import sys

from connect_four.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
