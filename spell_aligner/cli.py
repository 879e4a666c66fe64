"""Command-line interface for the spell aligner."""

import functools
from collections.abc import Callable
from pathlib import Path

import click
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spell_aligner.aligner import COST_MODELS, CostModel, align_distance, get_cost_model
from spell_aligner.config import Settings, get_settings
from spell_aligner.suggestions import (
    Suggestion,
    bound_word_length,
    check_text,
    suggest,
    tokenize,
)
from spell_aligner.word_list import WordListManager

console = Console()


def configure_verbose_logging() -> None:
    """Configure verbose debug logging."""
    logger.remove()
    logger.add(
        lambda msg: console.print(msg, end="", markup=False, highlight=False),
        level="DEBUG",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    console.print("[dim]Debug logging enabled[/dim]")


def configure_quiet_logging() -> None:
    """Configure quiet logging - only warnings and errors, and those are discarded."""
    logger.remove()
    logger.add(lambda msg: None, level="WARNING")


def load_settings_or_abort() -> Settings:
    """Load settings from the environment and .env file or abort with a helpful message."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("[bold red]Error:[/bold red] Invalid configuration")
        console.print("\nCheck the SPELL_* variables in your environment or .env file.")
        console.print(f"Details: {escape(str(e))}")
        raise click.Abort from e


def load_dictionary_or_abort(dictionary_path: Path) -> list[str]:
    """Load and deduplicate the dictionary, aborting on any load failure."""
    manager = WordListManager()
    try:
        words = manager.load_from_file(str(dictionary_path))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] Failed to load dictionary: {escape(str(e))}")
        raise click.Abort from e

    words = manager.remove_duplicates(words)
    if not words:
        console.print(
            f"[bold yellow]Warning:[/bold yellow] Dictionary is empty: "
            f"{escape(str(dictionary_path))}"
        )
    return words


def policy_options(command: Callable) -> Callable:
    """Attach the options shared by the suggest and check commands."""
    options = [
        click.option(
            "--dictionary",
            "-d",
            "dictionary_path",
            type=click.Path(path_type=Path),
            help="Path to dictionary file, one word per line (default: SPELL_DICTIONARY_PATH)",
        ),
        click.option(
            "--max",
            "-n",
            "max_suggestions",
            type=click.IntRange(min=1),
            help="Maximum number of suggestions per word",
        ),
        click.option(
            "--threshold",
            "-t",
            "distance_threshold",
            type=click.IntRange(min=0),
            help="Only suggest words within this distance",
        ),
        click.option(
            "--cost-model",
            "cost_model_name",
            type=click.Choice(sorted(COST_MODELS)),
            help="Alignment cost model",
        ),
        click.option(
            "--workers",
            type=click.IntRange(min=1),
            help="Number of processes used to score the dictionary",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Enable debug logging"),
    ]
    for option in reversed(options):
        command = option(command)

    @functools.wraps(command)
    def wrapper(*args, verbose: bool, **kwargs):
        if verbose:
            configure_verbose_logging()
        else:
            configure_quiet_logging()
        return command(*args, **kwargs)

    return wrapper


def resolve_policy(
    settings: Settings,
    dictionary_path: Path | None,
    max_suggestions: int | None,
    distance_threshold: int | None,
    cost_model_name: str | None,
    workers: int | None,
) -> dict:
    """Merge command-line overrides over configured settings."""
    return {
        "dictionary_path": dictionary_path or Path(settings.dictionary_path),
        "max_suggestions": max_suggestions or settings.max_suggestions,
        "distance_threshold": (
            distance_threshold if distance_threshold is not None else settings.distance_threshold
        ),
        "cost_model": get_cost_model(cost_model_name or settings.cost_model),
        "max_word_length": settings.max_word_length,
        "workers": workers or settings.workers,
    }


def render_suggestions(word: str, suggestions: list[Suggestion]) -> Table:
    """Build a rich table listing suggestions for one word."""
    table = Table(title=f'Suggestions for "{escape(word)}"')
    table.add_column("#", justify="right", style="dim")
    table.add_column("Word", style="cyan")
    table.add_column("Distance", justify="right", style="green")
    for rank, suggestion in enumerate(suggestions, start=1):
        table.add_row(str(rank), suggestion.word, str(suggestion.distance))
    return table


@click.group()
def cli() -> None:
    """Suggest spelling corrections using weighted alignment distance."""


@cli.command("suggest")
@click.argument("word")
@policy_options
def suggest_command(
    word: str,
    dictionary_path: Path | None,
    max_suggestions: int | None,
    distance_threshold: int | None,
    cost_model_name: str | None,
    workers: int | None,
) -> None:
    """Suggest dictionary words close to WORD."""
    settings = load_settings_or_abort()
    policy = resolve_policy(
        settings, dictionary_path, max_suggestions, distance_threshold, cost_model_name, workers
    )
    dictionary = load_dictionary_or_abort(policy.pop("dictionary_path"))

    query = word.strip().lower()
    if not query:
        console.print("Enter a word to check.")
        return

    if query in set(dictionary):
        console.print(f'[bold green]✓[/bold green] "{escape(query)}" is spelled correctly.')
        return

    suggestions = suggest(query, dictionary, **policy)
    if not suggestions:
        console.print(f'[yellow]No suggestions found for "{escape(query)}".[/yellow]')
        return

    console.print(render_suggestions(query, suggestions))


@cli.command("check")
@click.argument("text", required=False)
@click.option(
    "--file",
    "-f",
    "text_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Read the text to check from this file",
)
@policy_options
def check_command(
    text: str | None,
    text_file: Path | None,
    dictionary_path: Path | None,
    max_suggestions: int | None,
    distance_threshold: int | None,
    cost_model_name: str | None,
    workers: int | None,
) -> None:
    """Find misspelled words in TEXT (or --file) and suggest corrections."""
    if text_file is not None:
        try:
            text = text_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Failed to decode file with UTF-8 encoding: {text_file}")
            console.print(
                f"[bold red]Error:[/bold red] File encoding error in "
                f"{escape(str(text_file))}: {escape(str(e))}"
            )
            raise click.Abort from e
    if not text or not text.strip():
        console.print("[bold red]Error:[/bold red] Provide TEXT or --file to check.")
        raise click.Abort

    settings = load_settings_or_abort()
    policy = resolve_policy(
        settings, dictionary_path, max_suggestions, distance_threshold, cost_model_name, workers
    )
    dictionary = load_dictionary_or_abort(policy.pop("dictionary_path"))

    results = check_text(text, dictionary, **policy)
    word_count = len(tokenize(text))

    if not results:
        console.print(
            f"[bold green]✓ Perfect![/bold green] No misspellings found in {word_count} word(s)."
        )
        return

    console.print(
        f"[bold red]Found {len(results)} misspelled word(s)[/bold red] "
        f"out of {word_count} total word(s).\n"
    )
    for misspelled, suggestions in results.items():
        console.print(render_suggestions(misspelled, suggestions))


@cli.command("distance")
@click.argument("first")
@click.argument("second")
@click.option(
    "--cost-model",
    "cost_model_name",
    type=click.Choice(sorted(COST_MODELS)),
    default="weighted",
    show_default=True,
    help="Alignment cost model",
)
def distance_command(first: str, second: str, cost_model_name: str) -> None:
    """Print the alignment distance between FIRST and SECOND."""
    configure_quiet_logging()
    settings = load_settings_or_abort()
    cost_model: CostModel = get_cost_model(cost_model_name)
    first, second = (
        bound_word_length(word.strip().lower(), settings.max_word_length)
        for word in (first, second)
    )
    distance = align_distance(first, second, cost_model)
    console.print(distance)


if __name__ == "__main__":
    cli()
