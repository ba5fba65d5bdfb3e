"""Command-line entry point: ``profile-bigrams run profiles.csv``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from profile_bigrams import __version__
from profile_bigrams.config import load_settings
from profile_bigrams.data_prep import MissingFieldError

app = typer.Typer(
    name="profile-bigrams",
    help="Bigram, tf-idf and negation-sentiment analysis of profile essays by smoking status.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"profile-bigrams {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit."),
    ] = None,
) -> None:
    pass


@app.command()
def run(
    data_path: Annotated[
        Path,
        typer.Argument(help="CSV of profiles with an essay column and a smoking-status column."),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Directory for tables, charts and the log file. [default: output]"),
    ] = None,
    threshold: Annotated[
        int | None,
        typer.Option("--threshold", "-t", help="Minimum count (exclusive) for a bigram to enter the graph. [default: 20]"),
    ] = None,
    top_n: Annotated[
        int | None,
        typer.Option("--top-n", "-n", help="Bigrams per group in the ranked charts. [default: 15]"),
    ] = None,
    ngram_size: Annotated[
        int | None,
        typer.Option("--ngram", "-g", help="Words per n-gram for counts and tf-idf. [default: 2]"),
    ] = None,
    graph_group: Annotated[
        str | None,
        typer.Option("--group", help="Group whose bigrams make up the graph. [default: yes]"),
    ] = None,
    lexicon_path: Annotated[
        Path | None,
        typer.Option("--lexicon", help="AFINN-style word/score file (default: VADER lexicon)."),
    ] = None,
    stopwords_path: Annotated[
        Path | None,
        typer.Option("--stopwords", help="One stopword per line (default: scikit-learn English list)."),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Random seed for the graph layout. [default: 2017]"),
    ] = None,
    show: Annotated[
        bool,
        typer.Option("--show", help="Open each chart in a window as well as saving it."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Run the whole analysis and write tables and charts."""
    from profile_bigrams.logging import setup_logging
    from profile_bigrams.pipeline import render_all, run_pipeline, write_tables

    for label, path in (("Input", data_path), ("Lexicon", lexicon_path), ("Stopwords", stopwords_path)):
        if path is not None and not path.is_file():
            typer.echo(f"{label} file not found: {path}", err=True)
            raise typer.Exit(1)

    try:
        settings = load_settings(
            data_path=data_path,
            output_dir=output_dir,
            graph_min_count=threshold,
            top_n=top_n,
            ngram_size=ngram_size,
            graph_group=graph_group,
            lexicon_path=lexicon_path,
            stopwords_path=stopwords_path,
            layout_seed=seed,
        )
    except ValueError as exc:
        typer.echo(f"Invalid option: {exc}", err=True)
        raise typer.Exit(1)

    setup_logging(output_dir=settings.output_dir, verbose=verbose)

    try:
        result = run_pipeline(settings)
    except (MissingFieldError, FileNotFoundError, ValueError) as exc:
        # MissingFieldError, or a lexicon/stopword file that cannot be parsed
        logger.error("%s", exc)
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)

    tables = write_tables(result, settings.output_dir)
    charts = render_all(result, settings.output_dir, settings, show=show)

    typer.echo(f"Wrote {len(tables)} tables and {len(charts)} charts to {settings.output_dir}")
    for name, path in {**tables, **charts}.items():
        typer.echo(f"  {name}: {path}")
