#!/usr/bin/env python3
"""Exceptions raised while reading and writing FASTX data."""

from __future__ import annotations


class FastxError(Exception):
    """Base class for all FASTX parsing and I/O errors.

    Args:
        message: Human readable description of the problem.
        source: Name of the input (file path or ``<stdin>``).
        record_index: Zero-based index of the record being parsed.
        line_number: One-based line number in the decompressed stream.
        byte_offset: Offset of the offending line in the decompressed stream.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        record_index: int | None = None,
        line_number: int | None = None,
        byte_offset: int | None = None,
    ) -> None:
        self.message = message
        self.source = source
        self.record_index = record_index
        self.line_number = line_number
        self.byte_offset = byte_offset
        super().__init__(str(self))

    def __str__(self) -> str:
        location = []
        if self.source is not None:
            location.append(self.source)
        if self.record_index is not None:
            location.append(f"record {self.record_index}")
        if self.line_number is not None:
            location.append(f"line {self.line_number}")
        if self.byte_offset is not None:
            location.append(f"byte {self.byte_offset}")
        if location:
            return f"{self.message} ({', '.join(location)})"
        return self.message


class UnknownFormatError(FastxError):
    """A header line does not start with the sigil expected for the stream."""


class MissingIdentifierError(FastxError):
    """A header line has no identifier after its sigil."""


class TruncatedRecordError(FastxError):
    """The stream ended in the middle of a FASTQ record."""


class MissingSeparatorError(FastxError):
    """The third line of a FASTQ record does not start with '+'."""


class QualityLengthMismatchError(FastxError):
    """Quality and sequence lengths differ."""


class UnsupportedCompressionError(FastxError):
    """The input is compressed with a format that cannot be decoded."""


class FastxIOError(FastxError):
    """Reading or decompressing the underlying byte source failed."""
