"""Unit tests for seqtools.core.compression module."""

import bz2
import gzip
import io
import lzma

import pytest

from seqtools.core.compression import (
    CompressionKind,
    decompress,
    detect_compression,
    open_input,
    sniff_compression,
)
from seqtools.core.errors import FastxIOError, UnsupportedCompressionError

PLAIN = b">Seq1\nACGT\n>Seq2\nGGCC\n"


class TrickleStream(io.RawIOBase):
    """Returns at most one byte per read, like a slow pipe."""

    def __init__(self, data):
        self._data = data

    def readable(self):
        return True

    def read(self, size=-1):
        chunk, self._data = self._data[:1], self._data[1:]
        return chunk


class PipeStream(io.RawIOBase):
    """Hands out a few bytes per read1 call, refuses to wait for a full buffer."""

    def __init__(self, data):
        self._data = data

    def readable(self):
        return True

    def read(self, size=-1):
        assert 0 < size <= 6, "read would block until the buffer is full"
        chunk, self._data = self._data[:size], self._data[size:]
        return chunk

    def read1(self, size=-1):
        chunk, self._data = self._data[:3], self._data[3:]
        return chunk


class TestDetectCompression:
    """Tests for magic byte detection."""

    @pytest.mark.parametrize(
        "data,expected",
        [
            (gzip.compress(PLAIN), CompressionKind.GZIP),
            (bz2.compress(PLAIN), CompressionKind.BZIP2),
            (lzma.compress(PLAIN), CompressionKind.XZ),
            (PLAIN, CompressionKind.NONE),
            (b"@r1\nA\n+\nI\n", CompressionKind.NONE),
        ],
    )
    def test_known_formats(self, data, expected):
        assert detect_compression(data[:6]) is expected

    def test_short_prefix_is_plain(self):
        assert detect_compression(b">") is CompressionKind.NONE
        assert detect_compression(b"") is CompressionKind.NONE

    def test_short_gzip_magic(self):
        assert detect_compression(b"\x1f\x8b") is CompressionKind.GZIP

    def test_extension_is_ignored(self, temp_output_dir):
        """A gzip file named .fa is still decompressed."""
        path = temp_output_dir / "plain_name.fa"
        path.write_bytes(gzip.compress(PLAIN))
        with open_input(path) as stream:
            assert stream.read() == PLAIN

    @pytest.mark.parametrize("magic", [b"\x28\xb5\x2f\xfd\x00\x00", b"PK\x03\x04\x14\x00"])
    def test_unsupported_compression(self, magic):
        with pytest.raises(UnsupportedCompressionError, match="Unsupported compression"):
            detect_compression(magic)


class TestSniffCompression:
    """Tests that sniffing never loses bytes."""

    def test_replays_plain_bytes(self):
        kind, stream = sniff_compression(io.BytesIO(PLAIN))
        assert kind is CompressionKind.NONE
        assert stream.read() == PLAIN

    def test_replays_lines(self):
        _, stream = sniff_compression(io.BytesIO(PLAIN))
        assert stream.readline() == b">Seq1\n"
        assert stream.readline() == b"ACGT\n"

    def test_empty_input(self):
        kind, stream = sniff_compression(io.BytesIO(b""))
        assert kind is CompressionKind.NONE
        assert stream.read() == b""

    def test_input_shorter_than_peek_window(self):
        kind, stream = sniff_compression(io.BytesIO(b">a\n"))
        assert kind is CompressionKind.NONE
        assert stream.read() == b">a\n"

    def test_short_reads_are_accumulated(self):
        kind, stream = sniff_compression(TrickleStream(lzma.compress(PLAIN)))
        assert kind is CompressionKind.XZ
        assert decompress(kind, stream).read() == PLAIN

    def test_available_bytes_are_served_without_waiting(self):
        kind, stream = sniff_compression(PipeStream(PLAIN))
        assert kind is CompressionKind.NONE
        assert stream.readline() == b">Seq1\n"
        assert stream.readline() == b"ACGT\n"
        assert stream.read() == b">Seq2\nGGCC\n"

    @pytest.mark.parametrize("compress", [gzip.compress, bz2.compress, lzma.compress])
    def test_decompresses_after_sniffing(self, compress):
        kind, stream = sniff_compression(io.BytesIO(compress(PLAIN)))
        assert kind is not CompressionKind.NONE
        assert decompress(kind, stream).read() == PLAIN

    def test_concatenated_gzip_members(self):
        data = gzip.compress(b">a\nAC\n") + gzip.compress(b">b\nGT\n")
        kind, stream = sniff_compression(io.BytesIO(data))
        assert decompress(kind, stream).read() == b">a\nAC\n>b\nGT\n"


class TestOpenInput:
    """Tests for opening files and standard input."""

    def test_plain_file(self, temp_output_dir):
        path = temp_output_dir / "in.fa"
        path.write_bytes(PLAIN)
        with open_input(path) as stream:
            assert stream.read() == PLAIN

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FastxIOError, match="Cannot open input file"), open_input(temp_output_dir / "missing.fa"):
            pass

    def test_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(bz2.compress(PLAIN))))
        with open_input(None) as stream:
            assert stream.read() == PLAIN
