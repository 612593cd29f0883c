"""Command-line interface for Linnaeus.

Provides ``classify``, ``scores``, and ``tokens`` commands with rich
terminal output using the ``click`` and ``rich`` libraries.

Usage::

    linnaeus classify --corpus corpus.json "the ball game went to overtime"
    linnaeus scores --corpus corpus.json --strict --file article.txt
    echo "some text" | linnaeus tokens
"""

from __future__ import annotations

import functools
import json
import logging
import math
import sys
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .classifier import Classifier
from .config import ClassifierConfig
from .errors import LinnaeusError
from .persistence import JsonCorpus, get_backend
from .stopwords import FileStopwords, load_stopwords
from .tokenizer import WordTokenizer

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _score_style(score: float) -> str:
    """Return a rich style string for a raw score."""
    if not math.isfinite(score):
        return "dim red"
    if score == 0:
        return "dim"
    return "white"


def _read_text(text: str | None, file: Path | None) -> str | bytes:
    """Return the document as given, or the raw bytes of a file or stdin.

    Bytes are left for the tokenizer to decode with the configured encoding.
    """
    if file is not None:
        try:
            return file.read_bytes()
        except OSError as exc:
            raise click.FileError(str(file), hint=exc.strerror or str(exc)) from exc
    if text is not None:
        return text
    if sys.stdin.isatty():
        raise click.UsageError("Provide TEXT, --file, or pipe text on stdin.")
    return click.get_binary_stream("stdin").read()


def _build_config(
    env_file: Path | None,
    backend: str | None,
    corpus: Path | None,
    strict: bool,
    skip_stemming: bool,
    stopwords: Path | None,
) -> ClassifierConfig:
    config = ClassifierConfig.from_env(env_file)
    changes: dict = {}
    if corpus is not None:
        changes["persistence_backend"] = JsonCorpus
        changes["backend_options"] = {"path": str(corpus)}
    elif backend is not None:
        backend_cls = get_backend(backend)
        changes["persistence_backend"] = backend_cls
        if backend_cls is not config.persistence_backend:
            changes["backend_options"] = {}
    if strict:
        changes["only_matched_words"] = True
    if skip_stemming:
        changes["skip_stemming"] = True
    if stopwords is not None:
        changes["stopword_source"] = FileStopwords(stopwords)
    return config.with_options(**changes)


def classifier_options(func: Callable) -> Callable:
    """Options shared by every command."""

    @click.argument("text", required=False)
    @click.option("--file", "-f", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                  default=None, help="Read the document from a file.")
    @click.option("--corpus", "-c", type=click.Path(dir_okay=False, path_type=Path),
                  default=None, help="JSON corpus file (selects the json backend).")
    @click.option("--backend", "-b", type=click.Choice(["memory", "json", "redis"]),
                  default=None, help="Corpus backend (default from LINNAEUS_BACKEND, else redis).")
    @click.option("--strict", is_flag=True, help="Only-matched-words mode.")
    @click.option("--skip-stemming", is_flag=True, help="Do not stem tokens.")
    @click.option("--stopwords", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                  default=None, help="Stopword list, one word per line.")
    @click.option("--env-file", type=click.Path(dir_okay=False, path_type=Path),
                  default=None, help="Load LINNAEUS_* settings from this .env file.")
    @click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
                  help="Output format.")
    @click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
    @functools.wraps(func)
    def wrapper(text, file, corpus, backend, strict, skip_stemming, stopwords,
                env_file, output, verbose):
        _configure_logging(verbose)
        try:
            config = _build_config(env_file, backend, corpus, strict, skip_stemming, stopwords)
            document = _read_text(text, file)
            func(document, config, output)
        except LinnaeusError as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(package_name="linnaeus")
def main() -> None:
    """🌿 Linnaeus — classify documents against a trained word corpus."""
    pass


@main.command()
@classifier_options
def classify(document: str | bytes, config: ClassifierConfig, output: str) -> None:
    """Print the most likely category for a document.

    Example: linnaeus classify --corpus corpus.json "ball game"
    """
    result = Classifier(config).explain(document)

    if output == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    label = result.category or "(no categories)"
    console.print(Panel(
        f"[bold green]{label}[/]\n"
        f"[dim]Distinct words: {result.distinct_words} | "
        f"Categories scored: {len(result.scores)} | "
        f"Strict: {'yes' if result.only_matched_words else 'no'}[/]",
        title="🌿 Classification",
        border_style="blue",
    ))


@main.command()
@classifier_options
def scores(document: str | bytes, config: ClassifierConfig, output: str) -> None:
    """Print the score of every category, best first.

    Example: linnaeus scores --corpus corpus.json --strict "ball game"
    """
    result = Classifier(config).explain(document)

    if output == "json":
        click.echo(json.dumps(result.to_dict()["scores"], indent=2))
        return

    table = Table(title="Category scores", show_lines=False)
    table.add_column("#", justify="right", width=4)
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")

    for i, (category, score) in enumerate(result.ranking, 1):
        marker = " ✓" if category == result.category else ""
        table.add_row(str(i), category + marker, f"[{_score_style(score)}]{score:.4f}[/]")

    console.print(table)
    if result.category not in result.scores:
        console.print(f"Decision: [bold]{result.category or '(no categories)'}[/]")
    console.print()


@main.command()
@classifier_options
def tokens(document: str | bytes, config: ClassifierConfig, output: str) -> None:
    """Print the normalized word counts of a document.

    Does not read the corpus.

    Example: linnaeus tokens --skip-stemming "The games were played"
    """
    tokenizer = WordTokenizer(
        stopwords=load_stopwords(config.stopword_source),
        stemmer=config.stemmer,
        skip_stemming=config.skip_stemming,
        encoding=config.text_encoding,
    )
    counts = tokenizer.count_word_occurrences(document)
    ordered = sorted(counts.items(), key=lambda x: (-x[1], x[0]))

    if output == "json":
        click.echo(json.dumps(dict(ordered), indent=2))
        return

    table = Table(title=f"Tokens ({len(counts)} distinct)")
    table.add_column("Word", style="cyan")
    table.add_column("Count", justify="right")
    for word, count in ordered:
        table.add_row(word, str(count))
    console.print(table)


if __name__ == "__main__":
    main()
