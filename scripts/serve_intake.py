"""
Survey — Intake Server

Runs the Flask app with /api/submit and /api/health for local use.

Usage:
    GITHUB_TOKEN=... python scripts/serve_intake.py

Environment variables:
    GITHUB_TOKEN   token allowed to create issues (required for /api/submit)
    GITHUB_OWNER   repository owner (optional)
    GITHUB_REPO    repository name (optional)
    PORT           listen port (default 8000)
"""

import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from survey.app import main  # noqa: E402

if __name__ == "__main__":
    main()
