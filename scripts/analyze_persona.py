#!/usr/bin/env python3
"""
Persona Analysis CLI

Command-line interface for ranking the sections of 3-10 PDFs by relevance to a
persona and the job they need done. Writes persona_analysis.json with
metadata, ranked extractedSections and refined subSectionAnalysis excerpts.

Usage:
    python analyze_persona.py a.pdf b.pdf c.pdf \\
        --persona "PhD researcher in computational biology" \\
        --job "Prepare a literature review on graph neural networks"

    # Reliable preset, custom output path
    python analyze_persona.py docs/*.pdf -r "Investment analyst" -j "Compare revenue trends" \\
        --preset reliable -o results/analysis.json
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
    analyze_for_persona,
    load_settings,
)
from pdfwhisper.contexts.analysis.logger import setup_analysis_logger
from pdfwhisper.utils.file_io import build_sources, validate_input_files, write_json
from pdfwhisper.utils.report_formatter import Column, TableFormatter
from pdfwhisper.utils.timestamp import session_stamp

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

MIN_DOCUMENTS = 3
MAX_DOCUMENTS = 10


app = typer.Typer(
    help="Rank PDF sections by relevance to a persona and job-to-be-done",
    add_completion=False,
)


@app.command()
def main(
    files: Annotated[
        List[Path],
        typer.Argument(
            help=f"{MIN_DOCUMENTS}-{MAX_DOCUMENTS} PDF files (or extracted-span .json files)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        )
    ],
    persona: Annotated[
        str,
        typer.Option(
            "--persona",
            "-r",
            help="Reader role and expertise, e.g. 'PhD researcher in computational biology'",
        )
    ],
    job: Annotated[
        str,
        typer.Option(
            "--job",
            "-j",
            help="Task the reader needs to accomplish",
        )
    ],
    output_file: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output JSON path",
            dir_okay=False,
            resolve_path=True,
        )
    ] = Path("persona_analysis.json"),
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
            help="Override a setting, e.g. --set ranking.max_sections=5 (repeatable)",
        )
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--log-dir",
            help="Log directory (defaults to $LOGS_PATH/persona_<timestamp>)",
            file_okay=False,
        )
    ] = None,
):
    """
    Rank sections of several PDFs for a persona and job-to-be-done.

    Examples:

        # Three papers for a literature review
        python analyze_persona.py p1.pdf p2.pdf p3.pdf \\
            -r "PhD researcher" -j "Literature review on methodology"
    """
    if not persona.strip() or not job.strip():
        typer.echo("Error: --persona and --job must not be blank", err=True)
        raise typer.Exit(code=1)

    try:
        paths = validate_input_files(files, min_files=MIN_DOCUMENTS, max_files=MAX_DOCUMENTS)
        settings = load_settings(preset, overrides=overrides or None)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    setup_analysis_logger(
        log_dir or LOGS_PATH / f"persona_{session_stamp()}",
        operation="persona",
        preset=settings.preset,
    )

    try:
        analysis = asyncio.run(
            analyze_for_persona(
                build_sources(paths),
                persona.strip(),
                job.strip(),
                settings=settings,
                state=ProcessingState(),
            )
        )
    except AnalysisError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    write_json(analysis.to_dict(), output_file)

    report = TableFormatter(
        [
            Column("Rank", 6, ">"),
            Column("Page", 6, ">"),
            Column("Document", 30),
            Column("Section", 56),
        ]
    )
    report.add_section_header(f"RELEVANT SECTIONS: {persona.strip()}").add_table_header()
    for section in analysis.extracted_sections:
        report.add_row(
            [section.importance_rank, section.page_number, section.document, section.section_title]
        )
    report.add_summary(
        f"{len(analysis.extracted_sections)} section(s), "
        f"{len(analysis.sub_section_analysis)} excerpt(s) from "
        f"{len(analysis.metadata.documents)} document(s)"
    )

    typer.echo(report.render())
    typer.echo(f"\n✓ Wrote {output_file}")


if __name__ == "__main__":
    app()
