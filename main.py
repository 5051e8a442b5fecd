#!/usr/bin/env python3
"""
YMDiary - Diary Block Parser

Run the command line interface from a source checkout: python main.py FILE
"""

import sys

from ymdiary.cli import main


if __name__ == "__main__":
    sys.exit(main())
