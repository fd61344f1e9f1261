#!/usr/bin/env python3
"""Sample worklist workbook generator.

Builds an .xlsx file in the layout the report tool reads:
- Row 1: Title
- A start marker row
- One row per test URL, cycling through the three ways a cell can carry a URL
  (HYPERLINK formula, attached hyperlink, plain text)
- A stop marker row

Handy for trying the CLI against real test documents without preparing a
workbook by hand.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import openpyxl

STYLES = ("formula", "hyperlink", "text")


def create_workbook(
    output_path: Path,
    urls: list[str],
    sheet: str = "Tests",
    start_marker: str = "START",
    stop_marker: str = "END",
    title: str = "Metric tests",
) -> None:
    """Write the sample workbook.

    Args:
        output_path: Destination .xlsx path
        urls: Test document URLs, one worklist row each
        sheet: Source sheet name
        start_marker: Text placed right above the first URL
        stop_marker: Text placed right below the last URL
        title: Text for the first row
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet
    ws.append([title])
    ws.append([start_marker])
    for i, url in enumerate(urls):
        style = STYLES[i % len(STYLES)]
        label = url.rstrip("/").rsplit("/", 1)[-1] or url
        row = ws.max_row + 1
        if style == "formula":
            ws.cell(row=row, column=1, value=f'=HYPERLINK("{url}","{label}")')
        elif style == "hyperlink":
            cell = ws.cell(row=row, column=1, value=label)
            cell.hyperlink = url
        else:
            ws.cell(row=row, column=1, value=url)
    ws.append([stop_marker])
    wb.save(output_path)

    print(f"Created workbook: {output_path}")
    print(f"  Sheet: {sheet}")
    print(f"  Worklist rows: {len(urls)} (rows 3-{2 + len(urls)})")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a sample worklist workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/metrics.xlsx https://example.org/test1.ttl https://example.org/test2.ttl

  # Read URLs from a file, one per line
  %(prog)s data/metrics.xlsx --from-file urls.txt
        """,
    )
    parser.add_argument("output", type=Path, help="Output workbook path")
    parser.add_argument("urls", nargs="*", help="Test document URLs")
    parser.add_argument("--from-file", type=Path, default=None, help="File with one URL per line")
    parser.add_argument("--sheet", default="Tests", help="Source sheet name (default: Tests)")
    parser.add_argument("--start", default="START", help="Start marker (default: START)")
    parser.add_argument("--stop", default="END", help="Stop marker (default: END)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without writing")

    args = parser.parse_args()

    urls = list(args.urls)
    if args.from_file is not None:
        urls.extend(
            line.strip()
            for line in args.from_file.read_text(encoding="utf-8").splitlines()
            if line.strip()
        )
    if not urls:
        print("Error: at least one URL required", file=sys.stderr)
        return 1

    if args.dry_run:
        print(f"[DRY RUN] {args.output}: sheet={args.sheet} rows={len(urls)}")
        return 0

    try:
        create_workbook(args.output, urls, args.sheet, args.start, args.stop)
    except OSError as e:
        print(f"Error writing workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
