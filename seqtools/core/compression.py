#!/usr/bin/env python3
"""
seqtools, compression.py - Transparent decompression of input streams.
=====================================================================

Compression is detected from the leading magic bytes of the stream, never
from a file extension, so piped input is handled the same way as files.
"""

from __future__ import annotations

import bz2
import contextlib
import gzip
import io
import lzma
import sys
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import BinaryIO

from seqtools.core.errors import FastxIOError, UnsupportedCompressionError
from seqtools.core.logging_config import get_logger

logger = get_logger(__name__)

PEEK_SIZE = 6
"""Number of leading bytes inspected to detect compression."""

GZIP_MAGIC = b"\x1f\x8b"
BZIP2_MAGIC = b"BZh"
XZ_MAGIC = b"\xfd7zXZ\x00"

# Recognised containers that cannot be decoded
UNSUPPORTED_MAGICS = {
    b"\x28\xb5\x2f\xfd": "zstd",
    b"PK\x03\x04": "zip",
    b"\x04\x22\x4d\x18": "lz4",
}


class CompressionKind(str, Enum):
    NONE = "none"
    GZIP = "gzip"
    BZIP2 = "bzip2"
    XZ = "xz"


class ReplayStream(io.RawIOBase):
    """Raw stream that serves already consumed bytes before the rest of a source.

    Closing it leaves the wrapped source open.
    """

    def __init__(self, prefix: bytes, source: BinaryIO) -> None:
        super().__init__()
        self._prefix = prefix
        self._source = source

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._prefix:
            n = min(len(buffer), len(self._prefix))
            buffer[:n] = self._prefix[:n]
            self._prefix = self._prefix[n:]
            return n
        # Pipes: take what is available, never wait for a full buffer
        read = getattr(self._source, "read1", self._source.read)
        data = read(len(buffer))
        n = len(data)
        buffer[:n] = data
        return n


def detect_compression(prefix: bytes, source: str | None = None) -> CompressionKind:
    """Return the compression kind announced by the leading bytes of a stream.

    Args:
        prefix: Up to PEEK_SIZE leading bytes of the stream.
        source: Input name used in error messages.

    Raises:
        UnsupportedCompressionError: The prefix matches a known container
            that cannot be decompressed.
    """
    if prefix.startswith(GZIP_MAGIC):
        return CompressionKind.GZIP
    if prefix.startswith(BZIP2_MAGIC):
        return CompressionKind.BZIP2
    if prefix.startswith(XZ_MAGIC):
        return CompressionKind.XZ
    for magic, name in UNSUPPORTED_MAGICS.items():
        if prefix.startswith(magic):
            raise UnsupportedCompressionError(f"Unsupported compression format: {name}", source=source)
    return CompressionKind.NONE


def sniff_compression(stream: BinaryIO, source: str | None = None) -> tuple[CompressionKind, BinaryIO]:
    """Peek at the start of a byte stream to find its compression.

    Args:
        stream: Binary stream positioned at offset 0.
        source: Input name used in error messages.

    Returns:
        Tuple of (compression kind, stream replaying the peeked bytes).
    """
    prefix = b""
    try:
        while len(prefix) < PEEK_SIZE:
            chunk = stream.read(PEEK_SIZE - len(prefix))
            if not chunk:
                break
            prefix += chunk
    except OSError as e:
        raise FastxIOError(f"Failed to read input: {e}", source=source) from e

    kind = detect_compression(prefix, source)
    return kind, io.BufferedReader(ReplayStream(prefix, stream))


def decompress(kind: CompressionKind, stream: BinaryIO) -> BinaryIO:
    """Wrap a byte stream in the decompression filter for ``kind``."""
    if kind is CompressionKind.GZIP:
        return gzip.GzipFile(fileobj=stream, mode="rb")
    if kind is CompressionKind.BZIP2:
        return bz2.BZ2File(stream, mode="rb")
    if kind is CompressionKind.XZ:
        return lzma.LZMAFile(stream, mode="rb")
    return stream


@contextlib.contextmanager
def open_input(path: str | Path | None = None) -> Iterator[BinaryIO]:
    """Open a file or standard input as a decompressed byte stream.

    Args:
        path: Input file, or None to read from standard input.

    Yields:
        Readable binary stream of decompressed data.
    """
    source = "<stdin>" if path is None else str(path)
    with contextlib.ExitStack() as stack:
        if path is None:
            raw = sys.stdin.buffer
        else:
            try:
                raw = stack.enter_context(Path(path).open("rb"))
            except OSError as e:
                raise FastxIOError(f"Cannot open input file: {e.strerror}", source=source) from e

        kind, replay = sniff_compression(raw, source)
        logger.debug(f"Detected compression '{kind.value}' for {source}")
        stream = decompress(kind, replay)
        stack.callback(stream.close)
        yield stream
