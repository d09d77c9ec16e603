"""Survey constants — paths, column names, intake settings."""

from pathlib import Path

# ─── Paths ──────────────────────────────────────────────────────

SCRIPT_DIR = Path(__file__).resolve().parent.parent  # scripts/
PROJECT_DIR = SCRIPT_DIR.parent
DATA_DIR = PROJECT_DIR / "data"
OUTPUT_DIR = PROJECT_DIR / "site" / "out"

# Answers export — appended to externally, read once per run
ANSWERS_CSV = DATA_DIR / "answers.csv"
SUMMARY_JSON = OUTPUT_DIR / "summary.json"

# ─── Columns ────────────────────────────────────────────────────

# Keys every parsed row carries, even when the header lacks them
ROW_FIELDS = ["timestamp", "language", "player_name", "Q2_time", "Q3_time", "Q4_day"]

# Fields tabulated over the latest row per player
COUNT_FIELDS = ["Q2_time", "Q3_time", "Q4_day", "language"]

# ─── Intake ─────────────────────────────────────────────────────

# Checked in this order; the order shows up in the "missing" list
REQUIRED_FIELDS = ["player_name", "language", "Q2_time", "Q3_time", "Q4_day"]

GITHUB_API_BASE = "https://api.github.com"
GITHUB_OWNER_DEFAULT = "aoz-jcf-1165"
GITHUB_REPO_DEFAULT = "Ary-event-survey-web-2025.12"
ISSUE_LABEL = "survey"
USER_AGENT = "survey-intake"

# Upstream call budget and diagnostic cap
UPSTREAM_TIMEOUT_S = 15
UPSTREAM_BODY_LIMIT = 4000

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
