#!/usr/bin/env python3
"""
Outline Extraction CLI

Command-line interface for extracting heading outlines (title plus H1-H3
headings with page numbers) from PDF files. Each input produces one
<title>_outline.json in the output directory; repeated titles get a numeric
suffix (<title>_2_outline.json) so no outline overwrites another.

Inputs may also be JSON files of already-extracted text spans, which skips
PDF decoding entirely.

Usage:
    # Single PDF, outline written to the current directory
    python extract_outline.py report.pdf

    # Several PDFs with the basic preset
    python extract_outline.py a.pdf b.pdf --preset basic -o outlines/

    # Override individual settings
    python extract_outline.py report.pdf --set outline_max_pages=10 --set headings.max_levels=3
"""

import asyncio
import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from pdfwhisper.contexts.analysis import (
    AnalysisError,
    ProcessingState,
    extract_outlines,
    load_settings,
)
from pdfwhisper.contexts.analysis.logger import setup_analysis_logger
from pdfwhisper.utils.file_io import (
    build_sources,
    outline_output_paths,
    validate_input_files,
    write_json,
)
from pdfwhisper.utils.report_formatter import Column, TableFormatter
from pdfwhisper.utils.timestamp import session_stamp

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Extract heading outlines from PDF files",
    add_completion=False,
)


@app.command()
def main(
    files: Annotated[
        List[Path],
        typer.Argument(
            help="PDF files (or extracted-span .json files) to outline",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        )
    ],
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for <title>_outline.json files",
            file_okay=False,
            resolve_path=True,
        )
    ] = Path("."),
    preset: Annotated[
        Optional[str],
        typer.Option(
            "--preset",
            "-p",
            help="Settings preset (enhanced, basic, reliable)",
        )
    ] = None,
    overrides: Annotated[
        Optional[List[str]],
        typer.Option(
            "--set",
            help="Override a setting, e.g. --set headings.max_levels=3 (repeatable)",
        )
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--log-dir",
            help="Log directory (defaults to $LOGS_PATH/outline_<timestamp>)",
            file_okay=False,
        )
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Print every heading, not just per-document counts",
        )
    ] = False,
):
    """
    Extract heading outlines from PDF files.

    Examples:

        # Outline a single PDF
        python extract_outline.py report.pdf

        # Outline a batch into a directory, listing every heading
        python extract_outline.py *.pdf -o outlines/ --verbose
    """
    try:
        paths = validate_input_files(files, min_files=1)
        settings = load_settings(preset, overrides=overrides or None)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    setup_analysis_logger(
        log_dir or LOGS_PATH / f"outline_{session_stamp()}",
        operation="outline",
        preset=settings.preset,
    )

    try:
        outlines = asyncio.run(
            extract_outlines(build_sources(paths), settings=settings, state=ProcessingState())
        )
    except AnalysisError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    summary = TableFormatter(
        [Column("Document", 40), Column("Title", 40), Column("Headings", 10, ">")]
    )
    summary.add_section_header("OUTLINE EXTRACTION").add_table_header()

    output_paths = outline_output_paths(output_dir, [outline.title for outline in outlines])
    for path, outline, output_path in zip(paths, outlines, output_paths):
        output_file = write_json(outline.to_dict(), output_path)
        summary.add_row([path.name, outline.title, len(outline.outline)])
        if verbose:
            for item in outline.outline:
                indent = "  " * (item.level.rank - 1)
                typer.echo(f"{indent}{item.level.value} p{item.page}: {item.text}")
        typer.echo(f"✓ Wrote {output_file}")

    summary.add_summary(f"{len(outlines)} outline(s) written to {output_dir}")
    typer.echo()
    typer.echo(summary.render())


if __name__ == "__main__":
    app()
