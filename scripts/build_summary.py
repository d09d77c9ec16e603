"""
Survey — Summary Builder

Reads the collected answers export (data/answers.csv), keeps the latest
response per player, counts answers per question, and writes
site/out/summary.json for the static frontend.

Usage:
    python scripts/build_summary.py [--input PATH] [--output PATH]

A missing or empty answers file is not an error: nothing is written.
"""

import sys
from pathlib import Path

# Make `survey` importable when run as a plain script
SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from survey.main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
