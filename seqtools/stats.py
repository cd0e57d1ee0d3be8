#!/usr/bin/env python3
"""
seqtools, stats.py - Counting, lengths, character frequencies and identifiers.
=============================================================================

Every function consumes a record stream once. Results are written to stdout.
Histograms and their summary row are drawn on stderr so they never mix with
tabular output.
"""

from __future__ import annotations

import sys
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO

import numpy as np
from rich.console import Console
from rich.table import Table

from seqtools.core.constants import HISTOGRAM_BINS, HISTOGRAM_WIDTH
from seqtools.core.fastx_reader import open_fastx
from seqtools.core.logging_config import get_logger
from seqtools.core.records import Record
from seqtools.models.models import InputConfig, LengthConfig

logger = get_logger(__name__)

err_console = Console(stderr=True)


@dataclass
class LengthSummary:
    """Summary statistics of a set of sequence lengths."""

    count: int
    min: int
    max: int
    mean: float
    std: float
    q1: float
    median: float
    q3: float

    @classmethod
    def from_lengths(cls, lengths: Iterable[int]) -> LengthSummary:
        values = np.fromiter(lengths, dtype=np.int64)
        if values.size == 0:
            raise ValueError("Cannot summarize lengths of an empty input")
        q1, median, q3 = np.percentile(values, [25, 50, 75])
        return cls(
            count=int(values.size),
            min=int(values.min()),
            max=int(values.max()),
            mean=float(values.mean()),
            std=float(values.std()),
            q1=float(q1),
            median=float(median),
            q3=float(q3),
        )

    def _fields(self) -> list[tuple[str, str]]:
        return [
            ("Min", f"{self.min}"),
            ("Max", f"{self.max}"),
            ("Mean", f"{self.mean:.2f}"),
            ("Sdev", f"{self.std:.2f}"),
            ("Q1", f"{self.q1:g}"),
            ("Median", f"{self.median:g}"),
            ("Q3", f"{self.q3:g}"),
        ]

    def format_row(self) -> str:
        return "\t".join(f"{name}: {value}" for name, value in self._fields())

    def format_column(self) -> str:
        return "\n".join(f"{name}:\t{value}" for name, value in self._fields())


def draw_histogram(lengths: list[int], console: Console = err_console, bins: int = HISTOGRAM_BINS) -> None:
    """Draw a horizontal bar histogram of lengths."""
    counts, edges = np.histogram(lengths, bins=min(bins, max(1, len(set(lengths)))))
    peak = counts.max() if counts.size else 0

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Length", justify="right")
    table.add_column("Count", justify="right")
    table.add_column("")
    for count, start, end in zip(counts, edges[:-1], edges[1:]):
        bar = "█" * int(round(HISTOGRAM_WIDTH * count / peak)) if peak else ""
        table.add_row(f"{start:.0f}-{end:.0f}", str(count), f"[green]{bar}[/green]")
    console.print(table)


def count_records(records: Iterable[Record]) -> int:
    return sum(1 for _ in records)


def character_frequencies(sequence: str) -> Counter:
    return Counter(sequence)


def format_frequencies(counter: Counter) -> list[tuple[str, int, float]]:
    """Sorted (character, count, percent) rows of a frequency counter."""
    total = sum(counter.values())
    return [(char, n, 100.0 * n / total) for char, n in sorted(counter.items())]


def run_count(config: InputConfig, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    with open_fastx(config.input_path, config.skip_invalid_quality) as reader:
        n = count_records(reader)
    print(f"{n} sequences", file=out)
    return n


def run_length(config: LengthConfig, out: TextIO | None = None) -> LengthSummary | None:
    """Print per-record lengths, or a summary of them.

    Returns:
        LengthSummary when a summary was requested and the input is not empty.
    """
    out = out or sys.stdout
    with open_fastx(config.input_path, config.skip_invalid_quality) as reader:
        if not (config.summary or config.histogram):
            for record in reader:
                print(f"{record.id}\t{len(record)}", file=out)
            return None
        lengths = [len(record) for record in reader]

    if not lengths:
        logger.warning("No sequences found, nothing to summarize")
        return None

    summary = LengthSummary.from_lengths(lengths)
    if config.histogram:
        draw_histogram(lengths)
        err_console.print(summary.format_row(), markup=False, highlight=False, soft_wrap=True)
    else:
        print(summary.format_column(), file=out)
    return summary


def run_frequencies(config: InputConfig, per_sequence: bool = False, out: TextIO | None = None) -> Counter:
    """Print character frequencies, globally or per record.

    Returns:
        Counter of characters over the whole input.
    """
    out = out or sys.stdout
    total: Counter = Counter()
    with open_fastx(config.input_path, config.skip_invalid_quality) as reader:
        for record in reader:
            counter = character_frequencies(record.sequence)
            total.update(counter)
            if per_sequence:
                cells = [f"{char}: {n} {pct:.2f}%" for char, n, pct in format_frequencies(counter)]
                print("\t".join([record.id, *cells]), file=out)

    if not per_sequence:
        for char, n, pct in format_frequencies(total):
            print(f"{char}\t{n}\t{pct:.2f} %", file=out)
    return total


def run_ids(config: InputConfig, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    n = 0
    with open_fastx(config.input_path, config.skip_invalid_quality) as reader:
        for record in reader:
            print(record.id, file=out)
            n += 1
    return n
