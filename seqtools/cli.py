#!/usr/bin/env python3
"""Unified CLI for seqtools using Typer."""

import contextlib
from collections.abc import Iterator
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from seqtools.core.errors import FastxError
from seqtools.core.logging_config import get_logger, setup_logging
from seqtools.core.records import Format
from seqtools.version import __version__

app = typer.Typer(
    name="seqtools",
    help="Seqtools is a simple utility to work with FASTX files from the command line. "
    "It seamlessly handles compressed files (gzip, xz or bzip2).",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console(stderr=True)
logger = get_logger("cli")

InputOption = Annotated[
    Optional[Path],
    typer.Option("-i", "--in", help="Path to an input FASTX file (possibly compressed). [default: stdin]"),
]
OutputOption = Annotated[
    Optional[Path],
    typer.Option("-o", "--out", help="Path to output file, compressed if it ends in .gz/.bz2/.xz. [default: stdout]"),
]
SkipOption = Annotated[
    bool,
    typer.Option("--skip-invalid-quality", help="Skip FASTQ records whose quality and sequence lengths differ."),
]
UseIndicesOption = Annotated[
    bool, typer.Option("-u", "--use-indices", help="Use zero-based record positions instead of identifiers.")
]
IdsFileOption = Annotated[
    Optional[Path], typer.Option("-f", "--ids-file", help="Path to a file containing one identifier per line.")
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold green]seqtools[/bold green] version {__version__}")
        raise typer.Exit()


@contextlib.contextmanager
def report_errors() -> Iterator[None]:
    """Turn parse and validation errors into a message and exit code 1."""
    try:
        yield
    except FastxError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        for error in e.errors():
            console.print(f"[red]Error:[/red] {escape(error['msg'])}", highlight=False, soft_wrap=True)
        raise typer.Exit(1) from None
    except (ValueError, OSError) as e:
        if isinstance(e, BrokenPipeError):
            return
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1) from None


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable verbose output (DEBUG level)."),
    ] = False,
    log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Also write DEBUG logs to this file.")] = None,
) -> None:
    """Seqtools - work with FASTX files from the command line."""
    log_level = "DEBUG" if verbose else "WARNING"
    setup_logging(level=log_level, log_file=log_file)  # type: ignore


@app.command()
def count(input_path: InputOption = None, skip_invalid_quality: SkipOption = False) -> None:
    """Count the number of sequences in FASTX data."""
    from seqtools.models.models import InputConfig
    from seqtools.stats import run_count

    with report_errors():
        run_count(InputConfig(input_path=input_path, skip_invalid_quality=skip_invalid_quality))


@app.command()
def length(
    input_path: InputOption = None,
    summary: Annotated[
        bool, typer.Option("-s", "--summary", help="Report statistics about lengths instead of individual lengths.")
    ] = False,
    histogram: Annotated[bool, typer.Option("-t", "--histogram", help="Draw a histogram of lengths.")] = False,
    skip_invalid_quality: SkipOption = False,
) -> None:
    """Get length in nucleotides of sequences."""
    from seqtools.models.models import LengthConfig
    from seqtools.stats import run_length

    with report_errors():
        config = LengthConfig(
            input_path=input_path,
            skip_invalid_quality=skip_invalid_quality,
            summary=summary,
            histogram=histogram,
        )
        run_length(config)


@app.command()
def freqs(
    input_path: InputOption = None,
    per_sequence: Annotated[
        bool, typer.Option("-s", "--per-sequence", help="Get frequencies per sequence instead of globally.")
    ] = False,
    skip_invalid_quality: SkipOption = False,
) -> None:
    """Get statistics about character frequencies in the file."""
    from seqtools.models.models import InputConfig
    from seqtools.stats import run_frequencies

    with report_errors():
        run_frequencies(InputConfig(input_path=input_path, skip_invalid_quality=skip_invalid_quality), per_sequence)


@app.command()
def ids(input_path: InputOption = None, skip_invalid_quality: SkipOption = False) -> None:
    """Extract sequence identifiers."""
    from seqtools.models.models import InputConfig
    from seqtools.stats import run_ids

    with report_errors():
        run_ids(InputConfig(input_path=input_path, skip_invalid_quality=skip_invalid_quality))


@app.command()
def convert(
    input_path: InputOption = None,
    to: Annotated[Format, typer.Option("-t", "--to", help="Format of output sequences.")] = Format.FASTA,
    output_path: OutputOption = None,
    quality_char: Annotated[
        str, typer.Option("-q", "--quality-char", help="Quality character used when converting FASTA to FASTQ.")
    ] = "I",
    wrap: Annotated[int, typer.Option("-w", "--wrap", help="Wrap FASTA sequences at this width (0: no wrap).")] = 0,
    skip_invalid_quality: SkipOption = False,
) -> None:
    """Convert a file to FASTA or FASTQ."""
    from seqtools.convert import run_convert
    from seqtools.models.models import ConvertConfig

    with report_errors():
        config = ConvertConfig(
            input_path=input_path,
            output_path=output_path,
            skip_invalid_quality=skip_invalid_quality,
            to=to,
            quality_char=quality_char,
            line_width=wrap,
        )
        run_convert(config)


@app.command()
def select(
    ids: Annotated[Optional[list[str]], typer.Argument(help="List of sequence identifiers (or indices).")] = None,
    input_path: InputOption = None,
    use_indices: UseIndicesOption = False,
    ids_file: IdsFileOption = None,
    output_path: OutputOption = None,
    skip_invalid_quality: SkipOption = False,
) -> None:
    """Select sequences from file by identifier or index."""
    from seqtools.models.models import SelectConfig
    from seqtools.selection import run_select

    with report_errors():
        config = SelectConfig(
            input_path=input_path,
            output_path=output_path,
            skip_invalid_quality=skip_invalid_quality,
            ids=ids or [],
            ids_file=ids_file,
            use_indices=use_indices,
        )
        run_select(config)


@app.command()
def rename(
    pairs: Annotated[Optional[list[str]], typer.Argument(help="Renames given as OLD=NEW.")] = None,
    input_path: InputOption = None,
    use_indices: UseIndicesOption = False,
    map_file: Annotated[
        Optional[Path], typer.Option("-f", "--map-file", help="Path to a two column file: old and new identifier.")
    ] = None,
    output_path: OutputOption = None,
    skip_invalid_quality: SkipOption = False,
) -> None:
    """Rename sequences by identifier or index."""
    from seqtools.models.models import RenameConfig
    from seqtools.selection import run_rename

    with report_errors():
        config = RenameConfig(
            input_path=input_path,
            output_path=output_path,
            skip_invalid_quality=skip_invalid_quality,
            pairs=pairs or [],
            map_file=map_file,
            use_indices=use_indices,
        )
        run_rename(config)


@app.command(name="add-id")
def add_id(
    text: Annotated[str, typer.Argument(help="Text to add to sequence identifiers.")],
    ids: Annotated[
        Optional[list[str]], typer.Argument(help="Only modify these identifiers (or indices). [default: all]")
    ] = None,
    input_path: InputOption = None,
    use_indices: UseIndicesOption = False,
    ids_file: IdsFileOption = None,
    suffix: Annotated[bool, typer.Option("--suffix", help="Append the text instead of prepending it.")] = False,
    separator: Annotated[str, typer.Option("-s", "--separator", help="Separator between text and identifier.")] = "",
    output_path: OutputOption = None,
    skip_invalid_quality: SkipOption = False,
) -> None:
    """Add a prefix or suffix to sequence identifiers."""
    from seqtools.models.models import AddIdConfig
    from seqtools.selection import run_add_id

    with report_errors():
        config = AddIdConfig(
            input_path=input_path,
            output_path=output_path,
            skip_invalid_quality=skip_invalid_quality,
            ids=ids or [],
            ids_file=ids_file,
            use_indices=use_indices,
            text=text,
            suffix=suffix,
            separator=separator,
        )
        run_add_id(config)


@app.command()
def random(
    num: Annotated[int, typer.Option("-n", "--num", help="Number of sequences to generate.")] = 10,
    length: Annotated[float, typer.Option("-l", "--len", help="Average length of sequences to generate.")] = 100.0,
    std: Annotated[float, typer.Option("-s", "--std", help="Standard deviation of sequence length.")] = 0.0,
    sequence_type: Annotated[
        str, typer.Option("-t", "--sequence-type", help="Sequence type to generate: dna, rna or protein.")
    ] = "dna",
    output_format: Annotated[Format, typer.Option("-f", "--format", help="Format of generated sequences.")] = Format.FASTA,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Seed of the random number generator.")] = None,
    output_path: OutputOption = None,
) -> None:
    """Generate random sequences with normally distributed lengths."""
    from seqtools.models.models import RandomConfig
    from seqtools.random_seqs import run_random

    with report_errors():
        config = RandomConfig(
            num=num,
            mean_length=length,
            std=std,
            molecule=sequence_type.lower(),
            format=output_format,
            output_path=output_path,
            seed=seed,
        )
        run_random(config)


def main_cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main_cli()
