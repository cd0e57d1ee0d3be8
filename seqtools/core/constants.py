#!/usr/bin/env python3
"""Constants used throughout the seqtools package."""

# =============================================================================
# Quality Constants
# =============================================================================
DEFAULT_QUALITY_CHAR = "I"
"""Quality written for records converted from FASTA to FASTQ (Phred+33 score 40)."""

MIN_QUALITY_CHAR = "!"
MAX_QUALITY_CHAR = "~"
"""Printable range of Phred+33 quality characters."""

# =============================================================================
# Alphabets for random sequence generation
# =============================================================================
DNA_ALPHABET = "ACGT"
RNA_ALPHABET = "ACGU"
PROTEIN_ALPHABET = "ACDEFGHIKLMNPQRSTVWY"

# =============================================================================
# Length summary
# =============================================================================
HISTOGRAM_BINS = 20
"""Number of bins drawn by length histograms."""

HISTOGRAM_WIDTH = 50
"""Width in characters of the longest histogram bar."""
