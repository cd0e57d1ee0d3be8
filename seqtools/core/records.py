#!/usr/bin/env python3
"""Record model shared by the FASTX reader, writer and commands."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from seqtools.core.errors import QualityLengthMismatchError


class Format(str, Enum):
    """Sequence file format, resolved once per stream."""

    FASTA = "fasta"
    FASTQ = "fastq"

    @property
    def sigil(self) -> str:
        return ">" if self is Format.FASTA else "@"

    @classmethod
    def from_sigil(cls, char: str) -> Format | None:
        """Return the format introduced by a header sigil, or None."""
        if char == ">":
            return cls.FASTA
        if char == "@":
            return cls.FASTQ
        return None


@dataclass(frozen=True)
class Record:
    """A single FASTA or FASTQ entry.

    Attributes:
        id: First whitespace-delimited token of the header.
        description: Rest of the header line, possibly empty.
        sequence: Sequence characters with line breaks removed.
        quality: Quality string for FASTQ records, None for FASTA.
    """

    id: str
    sequence: str
    description: str = ""
    quality: str | None = None

    def __post_init__(self) -> None:
        if self.quality is not None and len(self.quality) != len(self.sequence):
            raise QualityLengthMismatchError(
                f"Quality length {len(self.quality)} does not match sequence length {len(self.sequence)} for '{self.id}'"
            )

    def __len__(self) -> int:
        return len(self.sequence)

    @property
    def header(self) -> str:
        """Header text without the sigil."""
        if self.description:
            return f"{self.id} {self.description}"
        return self.id

    def with_id(self, new_id: str) -> Record:
        return replace(self, id=new_id)
