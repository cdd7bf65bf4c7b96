#!/usr/bin/env python3
"""
Debug script to inspect what the SGPA extractor sees in a marksheet.

This helps diagnose issues with:
- What text was actually extracted from a PDF or photo
- Which numeric tokens were accepted as subject records
- Why the assistant says it "could not detect subjects"

Run with:
    python scripts/inspect_marksheet.py path/to/marksheet.pdf [--text]
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from acadgpt.errors import AcadGPTError, NoSubjectsDetectedError
from acadgpt.grading.sgpa import compute_sgpa, extract_subject_records, format_sgpa_report
from acadgpt.ingestion.documents import DocumentFormat, detect_format, extract_document_text

console = Console()


def show_records(text: str):
    """Show accepted subject records and the resulting SGPA."""
    records = extract_subject_records(text)

    table = Table(title="Accepted Subject Records")
    table.add_column("#", style="dim")
    table.add_column("Credit", style="cyan")
    table.add_column("Grade Point", style="cyan")
    table.add_column("Credit Point", style="green")
    table.add_column("Credit x GP", style="dim")

    for i, record in enumerate(records, 1):
        table.add_row(
            str(i),
            str(record.credit),
            f"{record.grade_point:.2f}",
            f"{record.credit_point:g}",
            f"{record.credit * record.grade_point:.2f}",
        )
    console.print(table)

    try:
        metric = compute_sgpa(records)
    except NoSubjectsDetectedError:
        console.print("[yellow]No subject records detected in this document.[/yellow]")
        return

    console.print(Panel(format_sgpa_report(metric, len(records)), border_style="green"))


def main():
    arg_parser = argparse.ArgumentParser(description="Inspect SGPA extraction for a marksheet")
    arg_parser.add_argument("path", type=Path, help="PDF or image of a marksheet")
    arg_parser.add_argument("--text", action="store_true", help="Also print the extracted text")
    args = arg_parser.parse_args()

    if not args.path.is_file():
        console.print(f"[red]File not found: {args.path}[/red]")
        sys.exit(1)

    fmt = detect_format(args.path.name)
    if fmt is DocumentFormat.UNSUPPORTED:
        console.print(f"[red]Unsupported file type: {args.path.suffix}[/red]")
        sys.exit(1)

    try:
        text = extract_document_text(args.path.read_bytes(), fmt, filename=args.path.name)
    except AcadGPTError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(f"[green]Extracted {len(text)} characters from {args.path.name} ({fmt.value})[/green]\n")
    if args.text:
        console.print(Panel(text, title="Extracted text", border_style="dim"))

    show_records(text)


if __name__ == "__main__":
    main()
