from seqtools.core.compression import CompressionKind, open_input, sniff_compression
from seqtools.core.errors import (
    FastxError,
    FastxIOError,
    MissingIdentifierError,
    MissingSeparatorError,
    QualityLengthMismatchError,
    TruncatedRecordError,
    UnknownFormatError,
    UnsupportedCompressionError,
)
from seqtools.core.fastx_reader import FastxReader, decode, open_fastx
from seqtools.core.fastx_writer import FastxWriter, encode, open_output
from seqtools.core.index import SelectionIndex, build_index
from seqtools.core.records import Format, Record

__all__ = [
    "CompressionKind",
    "open_input",
    "sniff_compression",
    "FastxError",
    "FastxIOError",
    "MissingIdentifierError",
    "MissingSeparatorError",
    "QualityLengthMismatchError",
    "TruncatedRecordError",
    "UnknownFormatError",
    "UnsupportedCompressionError",
    "FastxReader",
    "decode",
    "open_fastx",
    "FastxWriter",
    "encode",
    "open_output",
    "SelectionIndex",
    "build_index",
    "Format",
    "Record",
]
