#!/usr/bin/env python3
"""Generation of random sequences with normally distributed lengths."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from seqtools.core.constants import DNA_ALPHABET, PROTEIN_ALPHABET, RNA_ALPHABET
from seqtools.core.fastx_writer import FastxWriter, open_output
from seqtools.core.logging_config import get_logger
from seqtools.core.records import Record
from seqtools.models.models import RandomConfig
from seqtools.stats import LengthSummary, draw_histogram, err_console

logger = get_logger(__name__)

ALPHABETS = {
    "dna": DNA_ALPHABET,
    "rna": RNA_ALPHABET,
    "protein": PROTEIN_ALPHABET,
}


def random_lengths(rng: np.random.Generator, num: int, mean: float, std: float) -> np.ndarray:
    """Draw ``num`` lengths from N(mean, std), negative draws are clipped to 0."""
    lengths = rng.normal(mean, std, size=num) if std > 0 else np.full(num, mean)
    return np.clip(lengths, 0, None).astype(np.int64)


def random_sequence(rng: np.random.Generator, length: int, alphabet: str) -> str:
    letters = np.frombuffer(alphabet.encode("ascii"), dtype=np.uint8)
    return letters[rng.integers(0, len(letters), size=length)].tobytes().decode("ascii")


def generate_records(
    rng: np.random.Generator, lengths: np.ndarray, alphabet: str = DNA_ALPHABET
) -> Iterator[Record]:
    """Yield records named S0, S1, ... with the given sequence lengths."""
    for i, length in enumerate(lengths):
        yield Record(id=f"S{i}", sequence=random_sequence(rng, int(length), alphabet))


def run_random(config: RandomConfig) -> list[int]:
    """Write random sequences and report their length distribution on stderr.

    Returns:
        Lengths of the generated sequences.
    """
    rng = np.random.default_rng(config.seed)
    lengths = random_lengths(rng, config.num, config.mean_length, config.std)
    logger.debug(f"Generating {config.num} {config.molecule.upper()} sequences")

    with open_output(config.output_path) as handle:
        writer = FastxWriter(handle, config.format)
        writer.write_records(generate_records(rng, lengths, ALPHABETS[config.molecule]))

    if config.std > 0 and config.num > 0:
        draw_histogram(lengths.tolist())
        summary = LengthSummary.from_lengths(lengths.tolist())
        err_console.print(summary.format_row(), markup=False, highlight=False, soft_wrap=True)
    return lengths.tolist()
