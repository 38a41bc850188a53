"""Page text scraper CLI: entry-point for all scraping operations.

Usage:
    python cli/main.py --help

Commands:
    scrape    → render every URL in websites.txt and write one CSV per page
    targets   → show the parsed URL list and the file each URL would produce
    clean     → run the line filter over a text file (no browser needed)
    profiles  → list the built-in scrape profiles
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from textscraper.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from dataclasses import replace
from typing import Optional

import typer

from textscraper.config import PROFILES, get_profile, settings
from textscraper.scraper import (
    ExtractionResult,
    normalize_lines,
    open_session,
    run_pipeline,
)
from textscraper.scraper.output import output_path
from textscraper.scraper.targets import load_targets

app = typer.Typer(
    name="page-scraper",
    help="Scrape the main text of rendered pages into CSV files.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (default: SCRAPER_LOG_LEVEL or INFO)."
    ),
) -> None:
    """Configure logging before any command runs."""
    level = (log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Scrape
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    websites: Optional[Path] = typer.Option(None, "--websites", help="File with one URL per line."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Directory for CSV output."),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Output filename prefix."),
    profile: Optional[str] = typer.Option(None, "--profile", help="Scrape profile: basic | full."),
    bom: Optional[bool] = typer.Option(None, "--bom/--no-bom", help="Prepend a UTF-8 BOM to CSV files."),
    expand: Optional[bool] = typer.Option(
        None, "--expand/--no-expand", help="Open accordions and tabs before extracting."
    ),
    headless: Optional[bool] = typer.Option(None, "--headless/--headed", help="Run the browser headless."),
) -> None:
    """Scrape every URL in the target list, one after another."""
    overrides = {}
    if websites is not None:
        overrides["websites_file"] = websites
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if prefix is not None:
        overrides["output_prefix"] = prefix
    if headless is not None:
        overrides["headless"] = headless
    config = replace(settings, **overrides)

    try:
        chosen = get_profile(profile or config.profile)
    except KeyError as exc:
        raise typer.BadParameter(exc.args[0], param_hint="--profile") from None
    chosen = chosen.with_overrides(include_bom=bom, expand_interactive=expand)

    targets = load_targets(config.websites_file)
    if not targets:
        typer.echo(
            f"[scrape] No websites to scrape. Ensure {config.websites_file} "
            "contains at least one URL."
        )
        return

    config.ensure_output_dir()
    typer.echo(
        f"[scrape] {len(targets)} URL(s), profile={chosen.name!r}, output={config.output_dir}"
    )

    def _report(outcome, written) -> None:
        if isinstance(outcome, ExtractionResult):
            typer.echo(f"[scrape] OK    {outcome.url} → {written}")
        else:
            typer.echo(f"[scrape] FAIL  {outcome.url} ({outcome.reason})")

    with open_session(config) as session:
        summary = run_pipeline(
            session,
            targets,
            chosen,
            config.output_dir,
            config.output_prefix,
            failure_log=config.failure_log_path,
            on_outcome=_report,
        )

    typer.echo(
        f"[scrape] Done: {len(summary.written)} saved, {len(summary.failures)} failed."
    )
    if summary.failure_log is not None:
        typer.echo(f"[scrape] Failure log: {summary.failure_log}")
    if not summary.ok:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Inspection helpers
# ---------------------------------------------------------------------------
@app.command("targets")
def targets_cmd(
    websites: Optional[Path] = typer.Option(None, "--websites", help="File with one URL per line."),
) -> None:
    """List the URLs that would be scraped and their output files."""
    path = websites or settings.websites_file
    urls = load_targets(path)
    if not urls:
        typer.echo(f"[targets] No URLs found in {path}.")
        return
    for url in urls:
        dest = output_path(settings.output_dir, settings.output_prefix, url)
        typer.echo(f"  {url}  →  {dest.name}")


@app.command("clean")
def clean(
    source: str = typer.Argument(..., help="Text file to filter, or '-' for stdin."),
) -> None:
    """Print the lines of SOURCE that survive normalization and code filtering."""
    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(source).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            typer.echo(f"[clean] Cannot read {source!r}: {exc}")
            raise typer.Exit(1)
    for line in normalize_lines(text):
        typer.echo(line)


@app.command("profiles")
def profiles() -> None:
    """List the built-in scrape profiles."""
    for name in sorted(PROFILES):
        p = PROFILES[name]
        typer.echo(
            f"  {name}: stabilize={p.stabilize} expand={p.expand_interactive} "
            f"bom={p.include_bom}"
        )
        for selector in p.container_selectors:
            typer.echo(f"      {selector}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
