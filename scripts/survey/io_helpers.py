"""I/O operations — answers CSV loading, JSON writing."""

import json

from survey.constants import PROJECT_DIR


def _display(path):
    """Show project files relative to the project root."""
    try:
        return str(path.relative_to(PROJECT_DIR))
    except ValueError:
        return str(path)


# ─── Answers CSV ─────────────────────────────────────────────────

def load_answers_text(path):
    """Read the answers export. Returns None if missing or blank."""
    if not path.exists():
        print(f"  No {_display(path)}")
        return None

    # Undecodable bytes become U+FFFD instead of aborting the run
    text = path.read_text(encoding="utf-8", errors="replace").strip()
    if not text:
        print(f"  {_display(path)} is empty, nothing to summarize")
        return None
    return text


# ─── JSON Writers ────────────────────────────────────────────────

def write_json(path, data):
    """Write data as indented UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    size_kb = path.stat().st_size / 1024
    print(f"  Wrote {path.name} ({size_kb:.1f} KB)")
