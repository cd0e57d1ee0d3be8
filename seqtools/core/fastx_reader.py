#!/usr/bin/env python3
"""
seqtools, fastx_reader.py - Streaming FASTA/FASTQ parser.
=========================================================

Purpose
-------

Turn a decompressed byte stream into a lazy, single-pass sequence of
:class:`~seqtools.core.records.Record` objects. The format is detected once,
from the first non-blank line of the stream:

- ``>`` starts a FASTA stream. Sequence lines following a header are
  concatenated until the next ``>`` line, so wrapped sequences are supported.
- ``@`` starts a FASTQ stream. Every record is exactly four lines: header,
  sequence, ``+`` separator and quality.

Parse errors are fatal for the stream: once one is raised the reader is
exhausted and the input must be reopened to parse it again.
"""

from __future__ import annotations

import contextlib
import lzma
import zlib
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from seqtools.core.compression import open_input
from seqtools.core.errors import (
    FastxError,
    FastxIOError,
    MissingIdentifierError,
    MissingSeparatorError,
    QualityLengthMismatchError,
    TruncatedRecordError,
    UnknownFormatError,
)
from seqtools.core.logging_config import get_logger
from seqtools.core.records import Format, Record

logger = get_logger(__name__)

ENCODING = "utf-8"
# Undecodable bytes are carried through as lone surrogates and restored on output
ENCODING_ERRORS = "surrogateescape"

_WHITESPACE = b" \t\r\n\v\f"

_READ_ERRORS = (OSError, EOFError, zlib.error, lzma.LZMAError)


class FastxReader:
    """Pull-based FASTA/FASTQ record reader.

    Args:
        stream: Readable binary stream of decompressed data.
        skip_invalid_quality: Skip FASTQ records whose quality and sequence
            lengths differ (with a warning) instead of failing.
        source: Input name used in error messages.

    Attributes:
        format: Detected format, or None if the stream holds no records.

    Example:
        >>> reader = FastxReader(io.BytesIO(b">s1\\nACGT\\n"))
        >>> [r.id for r in reader]
        ['s1']
    """

    def __init__(self, stream: BinaryIO, skip_invalid_quality: bool = False, source: str = "<stdin>") -> None:
        self._stream = stream
        self.source = source
        self.skip_invalid_quality = skip_invalid_quality

        self._line_number = 0
        self._line_start = 0
        self._offset = 0
        self._record_index = 0
        self._pending: bytes | None = None
        self._done = False

        self.format: Format | None = self._detect_format()

    @property
    def records_read(self) -> int:
        """Number of records consumed so far, including skipped ones."""
        return self._record_index

    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        record = self.next_record()
        if record is None:
            raise StopIteration
        return record

    def next_record(self) -> Record | None:
        """Parse the next record.

        Returns:
            The next Record, or None once the stream is exhausted.
        """
        while not self._done:
            header = self._pending if self._pending is not None else self._next_nonblank()
            self._pending = None
            if header is None:
                self._done = True
                break

            if self.format is Format.FASTA:
                record = self._read_fasta(header)
            else:
                record = self._read_fastq(header)
            self._record_index += 1

            if record is not None:
                return record
        return None

    def _fail(self, error_class: type[FastxError], message: str) -> FastxError:
        self._done = True
        return error_class(
            message,
            source=self.source,
            record_index=self._record_index,
            line_number=self._line_number,
            byte_offset=self._line_start,
        )

    def _readline(self) -> bytes:
        try:
            line = self._stream.readline()
        except _READ_ERRORS as e:
            raise self._fail(FastxIOError, f"Failed to read input: {e}") from e
        if line:
            self._line_number += 1
            self._line_start = self._offset
            self._offset += len(line)
        return line

    def _next_nonblank(self) -> bytes | None:
        while True:
            line = self._readline()
            if not line:
                return None
            line = line.rstrip()
            if line:
                return line

    def _detect_format(self) -> Format | None:
        first = self._next_nonblank()
        if first is None:
            self._done = True
            logger.debug(f"No records in {self.source}")
            return None

        fmt = Format.from_sigil(chr(first[0]))
        if fmt is None:
            raise self._fail(UnknownFormatError, f"Unrecognized first character {first[:1]!r}, expected '>' or '@'")
        logger.debug(f"Detected {fmt.value.upper()} input in {self.source}")
        self._pending = first
        return fmt

    def _parse_header(self, header: bytes) -> tuple[str, str]:
        sigil = self.format.sigil
        if header[:1] != sigil.encode():
            raise self._fail(
                UnknownFormatError,
                f"Expected a header starting with '{sigil}' in {self.format.value.upper()} input, "
                f"found {header[:1]!r}",
            )
        text = header[1:].decode(ENCODING, ENCODING_ERRORS)
        if not text or text[0].isspace():
            raise self._fail(MissingIdentifierError, "Header line has no sequence identifier")
        fields = text.split(None, 1)
        description = fields[1].strip() if len(fields) > 1 else ""
        return fields[0], description

    def _read_fasta(self, header: bytes) -> Record:
        record_id, description = self._parse_header(header)
        chunks = []
        while True:
            line = self._readline()
            if not line:
                break
            if line.startswith(b">"):
                self._pending = line.rstrip()
                break
            chunks.append(line.translate(None, _WHITESPACE))

        sequence = b"".join(chunks).decode(ENCODING, ENCODING_ERRORS)
        return Record(id=record_id, sequence=sequence, description=description)

    def _read_fastq(self, header: bytes) -> Record | None:
        record_id, description = self._parse_header(header)

        seq_line = self._readline()
        if not seq_line:
            raise self._fail(TruncatedRecordError, f"Input ended before the sequence line of '{record_id}'")
        separator = self._readline()
        if not separator:
            raise self._fail(TruncatedRecordError, f"Input ended before the '+' line of '{record_id}'")
        if not separator.startswith(b"+"):
            raise self._fail(MissingSeparatorError, f"Expected a '+' separator line for '{record_id}'")
        qual_line = self._readline()
        if not qual_line:
            raise self._fail(TruncatedRecordError, f"Input ended before the quality line of '{record_id}'")

        sequence = seq_line.strip().decode(ENCODING, ENCODING_ERRORS)
        quality = qual_line.strip().decode(ENCODING, ENCODING_ERRORS)
        if len(quality) != len(sequence):
            message = (
                f"Quality length {len(quality)} does not match sequence length {len(sequence)} for '{record_id}'"
            )
            if self.skip_invalid_quality:
                logger.warning(f"Skipping record {self._record_index}: {message}")
                return None
            raise self._fail(QualityLengthMismatchError, message)

        return Record(id=record_id, sequence=sequence, description=description, quality=quality)


def decode(stream: BinaryIO, skip_invalid_quality: bool = False, source: str = "<stdin>") -> FastxReader:
    """Create a reader over an already decompressed byte stream."""
    return FastxReader(stream, skip_invalid_quality=skip_invalid_quality, source=source)


@contextlib.contextmanager
def open_fastx(path: str | Path | None = None, skip_invalid_quality: bool = False) -> Iterator[FastxReader]:
    """Open a (possibly compressed) FASTX file or standard input for reading.

    Args:
        path: Input file, or None for standard input.
        skip_invalid_quality: Skip FASTQ records with mismatched quality length.

    Yields:
        FastxReader over the decompressed input.

    Example:
        >>> with open_fastx("reads.fastq.gz") as reader:
        ...     n = sum(1 for _ in reader)
    """
    source = "<stdin>" if path is None else str(path)
    with open_input(path) as stream:
        yield FastxReader(stream, skip_invalid_quality=skip_invalid_quality, source=source)
