"""Command-line interface for textcat.

Provides ``learn``, ``classify``, ``embed`` and ``ngrams`` commands with
rich terminal output using the ``click`` and ``rich`` libraries.

Usage::

    textcat learn samples/ languages.json
    echo "the lazy dog" | textcat classify languages.json
    textcat classify --text "el perro perezoso"
    textcat ngrams "hi there"
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .category import Categories
from .config import Settings
from .defaults import languages
from .ngram import DEFAULT_NGRAM_LENGTH, Ngrams
from .storage import learn_from_directory

console = Console()

UNKNOWN = "Unknown"


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/] {escape(str(error))}")
    sys.exit(1)


def _open_store(path: Optional[Path]) -> Categories:
    if path is None:
        return languages()
    return Categories.load(path)


@click.group()
@click.version_option(package_name="textcat")
@click.pass_context
def main(ctx: click.Context) -> None:
    """🔤 Textcat — categorize text by character n-gram profiles.

    Learn category profiles from sample files, then tell which category
    an unknown text belongs to.
    """
    load_dotenv()
    try:
        settings = Settings.from_env()
    except ValueError as e:
        _fail(e)
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--extension", "-e", default=None,
              help="Sample file extension (default: TEXTCAT_SAMPLE_EXTENSION or 'sample').")
@click.pass_obj
def learn(settings: Settings, directory: Path, output: Path, extension: Optional[str]) -> None:
    """Learn categories from the sample files in DIRECTORY and save them to OUTPUT.

    Each ``<label>.sample`` file becomes one category.

    Example: textcat learn samples/ languages.json
    """
    with console.status("[bold blue]Learning categories...", spinner="dots"):
        try:
            store = learn_from_directory(directory, extension or settings.sample_extension)
            store.persist(output)
        except OSError as e:
            _fail(e)

    console.print(f"{escape(str(output))} has been created")
    console.print(f"[dim]Categories: {escape(', '.join(map(str, store.categories())))}[/]")


@main.command()
@click.argument("profiles", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--text", "-t", default=None, help="Text to classify (default: one line from stdin).")
@click.option("--threshold", type=float, default=None,
              help="Ambiguity threshold between 0 and 1 (default: TEXTCAT_THRESHOLD or 0.03).")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_obj
def classify(
    settings: Settings,
    profiles: Optional[Path],
    text: Optional[str],
    threshold: Optional[float],
    output: str,
) -> None:
    """Classify a line of text against the categories in PROFILES.

    Without PROFILES the file named by TEXTCAT_PROFILES is used, or the
    built-in language profiles when that is unset.

    Example: echo "the lazy dog" | textcat classify languages.json
    """
    if text is None:
        text = sys.stdin.readline()
    text = text.rstrip("\r\n")

    try:
        store = _open_store(profiles or settings.profiles_path)
        store.set_threshold(threshold if threshold is not None else settings.threshold)
    except (OSError, ValueError) as e:
        _fail(e)

    candidates = store.get_categories(text) or []
    category = candidates[0][0] if len(candidates) == 1 else None

    if output == "json":
        click.echo(json.dumps({
            "categories": store.categories(),
            "category": category,
            "candidates": [[label, dist] for label, dist in candidates],
            "input": text,
        }, indent=2, ensure_ascii=False))
        return

    console.print(f"Categories: {escape(', '.join(map(str, store.categories())))}")
    label = UNKNOWN if category is None else str(category)
    style = "bold red" if category is None else "bold green"
    console.print(f"Category: [{style}]{escape(label)}[/]")
    console.print(f"Input text: {escape(text)}")

    if len(candidates) > 1:
        table = Table(title="Candidates too close to call", show_lines=False)
        table.add_column("Category", style="cyan")
        table.add_column("Distance", justify="right")
        for name, dist in candidates:
            table.add_row(str(name), str(dist))
        console.print(table)


@main.command()
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
def embed(output: Path) -> None:
    """Export the built-in language profiles to OUTPUT.

    Example: textcat embed languages.json
    """
    try:
        store = languages()
        store.persist(output)
    except OSError as e:
        _fail(e)

    console.print(f"{escape(str(output))} has been created")


@main.command()
@click.argument("text")
@click.option("--length", "-n", type=click.IntRange(min=2), default=DEFAULT_NGRAM_LENGTH,
              help="Exclusive upper bound of the n-gram widths.")
@click.option("--top", "-k", type=click.IntRange(min=1), default=20,
              help="Number of ranked n-grams to show.")
def ngrams(text: str, length: int, top: int) -> None:
    """Show the top ranked n-grams of TEXT.

    Example: textcat ngrams "hi there"
    """
    profile = Ngrams.from_text(text, length)

    table = Table(title=f"N-grams ({len(profile)} distinct)", show_lines=False)
    table.add_column("Rank", justify="right", width=6)
    table.add_column("N-gram", style="cyan")
    table.add_column("Count", justify="right", width=7)

    for rank, ngram in enumerate(profile):
        if rank >= top:
            break
        table.add_row(str(rank), escape(repr(ngram.text)), str(ngram.count))

    console.print(Panel(escape(text), title="🔤 Input", border_style="blue"))
    console.print(table)


if __name__ == "__main__":
    main()
