#!/usr/bin/env python3
"""Conversion between FASTA and FASTQ."""

from seqtools.core.fastx_reader import open_fastx
from seqtools.core.fastx_writer import FastxWriter, open_output
from seqtools.core.logging_config import get_logger
from seqtools.core.records import Format
from seqtools.models.models import ConvertConfig

logger = get_logger(__name__)


def run_convert(config: ConvertConfig) -> int:
    """Re-encode every input record in the target format.

    FASTQ to FASTA drops qualities. FASTA to FASTQ fills qualities with
    ``config.quality_char``.

    Returns:
        Number of records written.
    """
    with open_fastx(config.input_path, config.skip_invalid_quality) as reader, open_output(
        config.output_path
    ) as handle:
        if reader.format is Format.FASTQ and config.to is Format.FASTA:
            logger.debug("Converting FASTQ to FASTA, quality scores are discarded")
        elif reader.format is Format.FASTA and config.to is Format.FASTQ:
            logger.debug(f"Converting FASTA to FASTQ with constant quality '{config.quality_char}'")

        writer = FastxWriter(handle, config.to, default_quality=config.quality_char, line_width=config.line_width)
        n = writer.write_records(reader)

    logger.info(f"Wrote {n} records as {config.to.value.upper()}")
    return n
