"""Shared pytest fixtures for seqtools tests."""

import bz2
import gzip
import lzma
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for test outputs."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir)


@pytest.fixture
def fasta_bytes():
    """Five FASTA records, one of them wrapped over several lines."""
    return (
        b">Seq1 first sequence\n"
        b"ACGTACGTAC\n"
        b">Seq2\n"
        b"GGGG\n"
        b"CCCC\n"
        b"TT\n"
        b">Seq3 third\n"
        b"aaaaNNNN\n"
        b">Seq4\n"
        b"A\n"
        b">Seq5 last one\n"
        b"CGCGCG\n"
    )


@pytest.fixture
def fastq_bytes():
    """Three FASTQ records."""
    return (
        b"@read1 lane=1\n"
        b"ACGT\n"
        b"+\n"
        b"IIII\n"
        b"@read2\n"
        b"GGCCA\n"
        b"+read2\n"
        b"!!##I\n"
        b"@read3 lane=2\n"
        b"T\n"
        b"+\n"
        b"5\n"
    )


@pytest.fixture
def fasta_file(temp_output_dir, fasta_bytes):
    path = temp_output_dir / "sequences.fa"
    path.write_bytes(fasta_bytes)
    return path


@pytest.fixture
def fastq_file(temp_output_dir, fastq_bytes):
    path = temp_output_dir / "reads.fq"
    path.write_bytes(fastq_bytes)
    return path


@pytest.fixture
def compressed_fasta_files(temp_output_dir, fasta_bytes):
    """The FASTA fixture compressed with each supported codec.

    File names deliberately carry no compression suffix.
    """
    files = {}
    for name, compress in (("gzip", gzip.compress), ("bzip2", bz2.compress), ("xz", lzma.compress)):
        path = temp_output_dir / f"sequences_{name}.fa"
        path.write_bytes(compress(fasta_bytes))
        files[name] = path
    return files
