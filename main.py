#!/usr/bin/env python3
"""TreadPro entry point.

Run with:
    python main.py
    python -m treadpro
"""

from treadpro.__main__ import main


if __name__ == "__main__":
    main()
