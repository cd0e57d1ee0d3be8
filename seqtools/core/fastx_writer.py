#!/usr/bin/env python3
"""Serialization of records to FASTA and FASTQ."""

from __future__ import annotations

import bz2
import contextlib
import gzip
import lzma
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import BinaryIO

from seqtools.core.constants import DEFAULT_QUALITY_CHAR
from seqtools.core.errors import FastxIOError
from seqtools.core.fastx_reader import ENCODING, ENCODING_ERRORS
from seqtools.core.records import Format, Record

_COMPRESSED_OPENERS = {
    ".gz": gzip.open,
    ".bz2": bz2.open,
    ".xz": lzma.open,
}


def _wrap(sequence: str, line_width: int) -> str:
    if line_width <= 0 or len(sequence) <= line_width:
        return sequence
    return "\n".join(sequence[i : i + line_width] for i in range(0, len(sequence), line_width))


def encode(
    record: Record,
    fmt: Format,
    default_quality: str = DEFAULT_QUALITY_CHAR,
    line_width: int = 0,
) -> bytes:
    """Serialize a record in the given format.

    Args:
        record: Record to serialize.
        fmt: Output format.
        default_quality: Quality character used when writing a record without
            qualities as FASTQ.
        line_width: Wrap FASTA sequences at this width, 0 writes one line.

    Returns:
        Newline-terminated FASTA or FASTQ text.
    """
    if fmt is Format.FASTA:
        text = f">{record.header}\n{_wrap(record.sequence, line_width)}\n"
    else:
        quality = record.quality if record.quality is not None else default_quality * len(record.sequence)
        text = f"@{record.header}\n{record.sequence}\n+\n{quality}\n"
    return text.encode(ENCODING, ENCODING_ERRORS)


class FastxWriter:
    """Write records to a binary handle in a fixed format."""

    def __init__(
        self,
        handle: BinaryIO,
        fmt: Format,
        default_quality: str = DEFAULT_QUALITY_CHAR,
        line_width: int = 0,
    ) -> None:
        self.handle = handle
        self.format = fmt
        self.default_quality = default_quality
        self.line_width = line_width

    def write(self, record: Record) -> None:
        self.handle.write(encode(record, self.format, self.default_quality, self.line_width))

    def write_records(self, records: Iterable[Record]) -> int:
        """Write all records and return how many were written."""
        count = 0
        for record in records:
            self.write(record)
            count += 1
        return count


@contextlib.contextmanager
def open_output(path: str | Path | None = None) -> Iterator[BinaryIO]:
    """Open a binary output handle.

    Files ending in .gz, .bz2 or .xz are compressed accordingly. Standard
    output is flushed on exit but left open.

    Args:
        path: Output file, or None for standard output.

    Yields:
        Writable binary handle.
    """
    if path is None:
        sys.stdout.flush()
        handle = sys.stdout.buffer
        try:
            yield handle
        finally:
            handle.flush()
        return

    path = Path(path)
    opener = _COMPRESSED_OPENERS.get(path.suffix.lower())
    try:
        handle = opener(path, "wb") if opener else path.open("wb")
    except OSError as e:
        raise FastxIOError(f"Cannot open output file: {e.strerror}", source=str(path)) from e
    with handle:
        yield handle
