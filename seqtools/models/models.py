from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from seqtools.core.constants import DEFAULT_QUALITY_CHAR, MAX_QUALITY_CHAR, MIN_QUALITY_CHAR
from seqtools.core.records import Format

Molecule = Literal["dna", "rna", "protein"]


# =============================================================================
# Shared Models
# =============================================================================


class InputConfig(BaseModel):
    """Where records are read from."""

    input_path: Path | None = None  # None reads stdin
    skip_invalid_quality: bool = False

    @field_validator("input_path")
    @classmethod
    def validate_input_exists(cls, v: Path | None) -> Path | None:
        if v is not None and not v.is_file():
            raise ValueError(f"Input file not found: {v}")
        return v


class OutputConfig(InputConfig):
    """Input plus where records are written."""

    output_path: Path | None = None  # None writes stdout


class SelectionConfig(OutputConfig):
    """Identifiers or positions picked from the command line and/or a file."""

    ids: list[str] = []
    ids_file: Path | None = None
    use_indices: bool = False

    @field_validator("ids_file")
    @classmethod
    def validate_ids_file(cls, v: Path | None) -> Path | None:
        if v is not None and not v.is_file():
            raise ValueError(f"Identifier file not found: {v}")
        return v


# =============================================================================
# Command Models
# =============================================================================


class LengthConfig(InputConfig):
    summary: bool = False
    histogram: bool = False


class ConvertConfig(OutputConfig):
    """Configuration for format conversion."""

    to: Format = Format.FASTA
    quality_char: str = DEFAULT_QUALITY_CHAR
    line_width: int = Field(default=0, ge=0)

    @field_validator("quality_char")
    @classmethod
    def validate_quality_char(cls, v: str) -> str:
        if len(v) != 1 or not MIN_QUALITY_CHAR <= v <= MAX_QUALITY_CHAR:
            raise ValueError(f"Quality character must be a single character between '!' and '~', got '{v}'")
        return v


class SelectConfig(SelectionConfig):
    @model_validator(mode="after")
    def validate_has_selection(self) -> SelectConfig:
        if not self.ids and self.ids_file is None:
            raise ValueError("No identifiers given: pass them as arguments or with --ids-file")
        return self


class RenameConfig(OutputConfig):
    pairs: list[str] = []
    map_file: Path | None = None
    use_indices: bool = False

    @model_validator(mode="after")
    def validate_has_renames(self) -> RenameConfig:
        if not self.pairs and self.map_file is None:
            raise ValueError("No renames given: pass OLD=NEW arguments or a --map-file")
        if self.map_file is not None and not self.map_file.is_file():
            raise ValueError(f"Rename file not found: {self.map_file}")
        return self


class AddIdConfig(SelectionConfig):
    """Text added to identifiers of the selected (default: all) records."""

    text: str
    suffix: bool = False
    separator: str = ""

    @field_validator("text", "separator")
    @classmethod
    def validate_no_whitespace(cls, v: str) -> str:
        if any(c.isspace() for c in v):
            raise ValueError("Identifiers cannot contain whitespace")
        return v


class RandomConfig(BaseModel):
    """Parameters of random sequence generation."""

    num: int = Field(default=10, ge=0)
    mean_length: float = Field(default=100.0, ge=0)
    std: float = Field(default=0.0, ge=0)
    molecule: Molecule = "dna"
    format: Format = Format.FASTA
    output_path: Path | None = None
    seed: int | None = None
