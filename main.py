#!/usr/bin/env python3
"""EyeBreak entry point.

Run with:
    python main.py
    python -m eyebreak
"""

from eyebreak.__main__ import main


if __name__ == "__main__":
    main()
