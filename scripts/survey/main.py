"""Summary orchestration — build_summary_file and main entry point."""

from pathlib import Path

from survey.aggregation import build_summary
from survey.constants import ANSWERS_CSV, SUMMARY_JSON
from survey.csv_parsing import parse_csv_text
from survey.io_helpers import load_answers_text, write_json


def build_summary_file(input_path=ANSWERS_CSV, output_path=SUMMARY_JSON, now=None):
    """Read the answers CSV, aggregate it, and write the summary JSON.

    Returns the summary, or None when there was nothing to summarize
    (missing file, blank file, header only). In that case the output file
    is left untouched. Write errors propagate.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    print("\n[1/3] Loading answers...")
    text = load_answers_text(input_path)
    if text is None:
        return None

    header, rows = parse_csv_text(text)
    if not rows:
        print("  No data rows, nothing to summarize")
        return None
    print(f"  Parsed {len(rows)} rows ({len(header)} columns)")

    print("\n[2/3] Aggregating...")
    summary = build_summary(rows, now=now)
    print(f"  {summary['unique_players']} unique players")

    print("\n[3/3] Writing summary...")
    write_json(output_path, summary)
    return summary


def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(description="Survey Summary Builder")
    parser.add_argument("--input", type=Path, default=ANSWERS_CSV,
                        help="Answers CSV export (default: data/answers.csv)")
    parser.add_argument("--output", type=Path, default=SUMMARY_JSON,
                        help="Summary JSON path (default: site/out/summary.json)")
    args = parser.parse_args(argv)

    print("Survey Summary Builder")
    print("=" * 50)

    summary = build_summary_file(args.input, args.output)
    if summary is None:
        print("\nDone! Nothing to summarize.")
        return 0

    print(f"\nDone! {summary['total_rows']} rows processed → {args.output}")
    return 0
