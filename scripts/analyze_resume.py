#!/usr/bin/env python3
"""
Analyze resumes against job descriptions from the terminal.

Runs the same analysis the ats-analyzer endpoint performs (directly, without the
HTTP server) and keeps results in the local analysis history.

Commands:
    analyze - Score a resume text file against a job description file
    history - Show recent analyses
    clear   - Clear the analysis history

Examples:\n

    analyze_resume.py analyze resume.txt job.txt

    analyze_resume.py analyze resume.txt job.txt --json

    analyze_resume.py history --limit 5
"""

import json
from pathlib import Path

import typer
from typing_extensions import Annotated

from vitae.contexts.analysis.analyzer import analyze_resume
from vitae.contexts.analysis.history import AnalysisHistory, derive_job_title, score_band
from vitae.contexts.analysis.logger import setup_analysis_logger
from vitae.utils.llm import LLMError
from vitae.utils.logger import session_log_dir
from vitae.utils.timestamp import format_timestamp


BAND_COLORS = {
    "excellent": typer.colors.GREEN,
    "good": typer.colors.BLUE,
    "fair": typer.colors.YELLOW,
    "poor": typer.colors.RED,
    "unknown": typer.colors.WHITE,
}

app = typer.Typer(
    help="Analyze resumes for ATS compatibility",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _print_list(title: str, items: list) -> None:
    if not items:
        return
    typer.secho(f"\n{title}:", bold=True)
    for item in items:
        typer.echo(f"  • {item}")


@app.command("analyze")
def analyze_command(
    resume_file: Annotated[Path, typer.Argument(help="Plain-text resume", exists=True)],
    job_file: Annotated[Path, typer.Argument(help="Plain-text job description", exists=True)],
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw result as JSON")] = False,
    save: Annotated[bool, typer.Option(help="Record the result in the local history")] = True,
):
    """Score a resume against a job description."""
    log_dir = session_log_dir("analyze")
    setup_analysis_logger(log_dir)

    resume_text = resume_file.read_text(encoding="utf-8")
    job_description = job_file.read_text(encoding="utf-8")

    try:
        result = analyze_resume(resume_text, job_description)
    except (LLMError, ValueError) as e:
        # Input, credential, upstream and parse failures
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if save:
        history = AnalysisHistory()
        history.remember_inputs(resume_text, job_description)
        history.record(result, derive_job_title(job_description))

    if as_json:
        typer.echo(json.dumps(result, indent=2))
        return

    score = result.get("score")
    band = score_band(score)
    typer.secho(f"\nATS score: {score}/100 ({band})", fg=BAND_COLORS[band], bold=True)

    keyword_match = result.get("keywordMatch") or {}
    _print_list("Matched keywords", keyword_match.get("matched", []))
    _print_list("Missing keywords", keyword_match.get("missing", []))
    _print_list("Format issues", result.get("formatIssues", []))
    _print_list("Suggestions", result.get("contentSuggestions", []))

    typer.secho("\nOverall feedback:", bold=True)
    typer.echo(f"  {result.get('overallFeedback', '')}")


@app.command("history")
def history_command(
    limit: Annotated[int, typer.Option("--limit", "-n", help="Entries to show")] = 10,
):
    """Show recent analyses, newest first."""
    entries = AnalysisHistory().entries()
    if not entries:
        typer.echo("No analyses recorded yet")
        return

    for entry in entries[:limit]:
        band = score_band(entry.get("score"))
        when = format_timestamp(entry.get("createdAt", ""), relative=True)
        typer.secho(f"{entry.get('score', '?'):>4}", fg=BAND_COLORS[band], nl=False)
        typer.echo(f"  {when:>10}  {entry.get('jobTitle', '')}")


@app.command("clear")
def clear_command():
    """Clear the analysis history."""
    AnalysisHistory().clear()
    typer.secho("✓ Analysis history cleared", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
