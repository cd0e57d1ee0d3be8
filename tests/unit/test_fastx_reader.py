"""Unit tests for seqtools.core.fastx_reader module."""

import io

import pytest

from seqtools.core.errors import (
    FastxIOError,
    MissingIdentifierError,
    MissingSeparatorError,
    QualityLengthMismatchError,
    TruncatedRecordError,
    UnknownFormatError,
)
from seqtools.core.fastx_reader import FastxReader, decode, open_fastx
from seqtools.core.records import Format, Record


def parse(data: bytes, **kwargs) -> list[Record]:
    return list(decode(io.BytesIO(data), **kwargs))


class TestFastaParsing:
    """Tests for the FASTA grammar."""

    def test_records(self, fasta_bytes):
        records = parse(fasta_bytes)
        assert [r.id for r in records] == ["Seq1", "Seq2", "Seq3", "Seq4", "Seq5"]
        assert records[0].description == "first sequence"
        assert records[1].description == ""
        assert all(r.quality is None for r in records)

    def test_wrapped_sequence_is_joined(self, fasta_bytes):
        records = parse(fasta_bytes)
        assert records[1].sequence == "GGGGCCCCTT"

    def test_case_preserved(self, fasta_bytes):
        assert parse(fasta_bytes)[2].sequence == "aaaaNNNN"

    def test_whitespace_and_crlf_removed(self):
        records = parse(b">s1 desc\r\nAC GT\r\n  TT\t\r\n")
        assert records == [Record(id="s1", description="desc", sequence="ACGTTT")]

    def test_no_trailing_newline(self):
        assert parse(b">s1\nACGT") == [Record(id="s1", sequence="ACGT")]

    def test_header_without_sequence(self):
        records = parse(b">s1\n>s2\nAC\n>s3\n")
        assert [(r.id, r.sequence) for r in records] == [("s1", ""), ("s2", "AC"), ("s3", "")]

    def test_at_sign_in_body_is_sequence(self):
        """Lines starting with '@' inside a FASTA body are not new records."""
        records = parse(b">s1\nACGT\n@notaheader\n>s2\nGG\n")
        assert [r.id for r in records] == ["s1", "s2"]
        assert records[0].sequence == "ACGT@notaheader"

    def test_blank_lines_ignored(self):
        records = parse(b"\n\n>s1\nAC\n\nGT\n\n>s2\nA\n")
        assert [(r.id, r.sequence) for r in records] == [("s1", "ACGT"), ("s2", "A")]

    def test_format_detected(self, fasta_bytes):
        assert decode(io.BytesIO(fasta_bytes)).format is Format.FASTA

    def test_undecodable_bytes_survive(self):
        record = parse(b">s1 caf\xe9\nACGT\n")[0]
        assert record.description.encode("utf-8", "surrogateescape") == b"caf\xe9"


class TestFastqParsing:
    """Tests for the FASTQ grammar."""

    def test_records(self, fastq_bytes):
        records = parse(fastq_bytes)
        assert [r.id for r in records] == ["read1", "read2", "read3"]
        assert records[0] == Record(id="read1", description="lane=1", sequence="ACGT", quality="IIII")
        assert records[1].quality == "!!##I"

    def test_format_detected(self, fastq_bytes):
        assert decode(io.BytesIO(fastq_bytes)).format is Format.FASTQ

    def test_separator_content_ignored(self):
        records = parse(b"@r1\nAC\n+anything goes here\nII\n")
        assert records[0].quality == "II"

    def test_quality_may_start_with_at_sign(self):
        records = parse(b"@r1\nACG\n+\n@@I\n@r2\nA\n+\nI\n")
        assert [(r.id, r.quality) for r in records] == [("r1", "@@I"), ("r2", "I")]

    def test_blank_lines_between_records(self):
        records = parse(b"@r1\nA\n+\nI\n\n\n@r2\nC\n+\nI\n")
        assert [r.id for r in records] == ["r1", "r2"]

    def test_empty_sequence(self):
        assert parse(b"@r1\n\n+\n\n") == [Record(id="r1", sequence="", quality="")]


class TestEmptyInput:
    """Empty input is a valid zero-record stream."""

    @pytest.mark.parametrize("data", [b"", b"\n", b"\n\n  \n\r\n"])
    def test_no_records(self, data):
        reader = decode(io.BytesIO(data))
        assert reader.format is None
        assert list(reader) == []
        assert reader.next_record() is None


class TestReaderErrors:
    """Malformed input raises and stops the stream."""

    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError, match="expected '>' or '@'"):
            decode(io.BytesIO(b"ACGT\n>s1\nAC\n"))

    def test_truncated_fastq_missing_quality(self):
        reader = decode(io.BytesIO(b"@r1\nACGT\n+\nIIII\n@r2\nACGT\n+\n"))
        assert next(reader).id == "r1"
        with pytest.raises(TruncatedRecordError, match="quality line of 'r2'") as exc_info:
            next(reader)
        assert exc_info.value.record_index == 1
        assert exc_info.value.line_number == 7

    @pytest.mark.parametrize("data", [b"@r1\n", b"@r1\nACGT\n"])
    def test_truncated_fastq_early(self, data):
        with pytest.raises(TruncatedRecordError):
            parse(data)

    def test_quality_length_mismatch(self):
        with pytest.raises(QualityLengthMismatchError, match="Quality length 3 does not match sequence length 4"):
            parse(b"@r1\nACGT\n+\n!!!\n")

    def test_quality_mismatch_skipped_on_request(self):
        data = b"@r1\nACGT\n+\n!!!\n@r2\nAC\n+\nII\n"
        records = parse(data, skip_invalid_quality=True)
        assert [r.id for r in records] == ["r2"]

    def test_records_read_counts_skipped(self):
        reader = decode(io.BytesIO(b"@r1\nACGT\n+\n!!!\n@r2\nAC\n+\nII\n"), skip_invalid_quality=True)
        list(reader)
        assert reader.records_read == 2

    def test_missing_separator(self):
        with pytest.raises(MissingSeparatorError):
            parse(b"@r1\nACGT\nIIII\n")

    @pytest.mark.parametrize("data", [b">\nACGT\n", b"> desc\nACGT\n", b"@\nA\n+\nI\n"])
    def test_missing_identifier(self, data):
        with pytest.raises(MissingIdentifierError):
            parse(data)

    def test_mixed_format_in_fastq(self):
        with pytest.raises(UnknownFormatError, match="Expected a header starting with '@'"):
            parse(b"@r1\nA\n+\nI\n>s1\nACGT\n")

    def test_error_is_terminal(self):
        reader = decode(io.BytesIO(b"@r1\nACGT\n+\n!!!\n@r2\nAC\n+\nII\n"))
        with pytest.raises(QualityLengthMismatchError):
            next(reader)
        assert list(reader) == []

    def test_error_message_has_position(self):
        reader = decode(io.BytesIO(b">s1\nAC\n>\nGG\n"), source="in.fa")
        assert next(reader).id == "s1"
        with pytest.raises(MissingIdentifierError) as exc_info:
            next(reader)
        message = str(exc_info.value)
        assert "in.fa" in message
        assert "record 1" in message
        assert "line 3" in message

    def test_corrupt_gzip(self, temp_output_dir):
        path = temp_output_dir / "bad.fa.gz"
        path.write_bytes(b"\x1f\x8b\x08\x00" + b"\x00" * 20)
        with pytest.raises(FastxIOError), open_fastx(path) as reader:
            list(reader)


class TestOpenFastx:
    """Compression is transparent to the parser."""

    def test_compressed_inputs_match_plain(self, fasta_file, compressed_fasta_files):
        with open_fastx(fasta_file) as reader:
            expected = list(reader)
        for path in compressed_fasta_files.values():
            with open_fastx(path) as reader:
                assert list(reader) == expected

    def test_source_in_errors(self, temp_output_dir):
        path = temp_output_dir / "bad.fq"
        path.write_bytes(b"@r1\nACGT\n")
        with pytest.raises(TruncatedRecordError, match="bad.fq"), open_fastx(path) as reader:
            list(reader)
