#!/usr/bin/env python3
"""
seqtools, selection.py - Select, rename and tag records.
========================================================

All three commands share :class:`~seqtools.core.index.SelectionIndex`: the
records are streamed once and the output keeps the input order.
"""

from collections.abc import Iterable, Iterator

from seqtools.core.fastx_reader import open_fastx
from seqtools.core.fastx_writer import FastxWriter, open_output
from seqtools.core.index import SelectionIndex, build_index, load_identifiers, load_rename_map, parse_rename_pairs
from seqtools.core.logging_config import get_logger
from seqtools.core.records import Record
from seqtools.models.models import AddIdConfig, RenameConfig, SelectConfig, SelectionConfig

logger = get_logger(__name__)


def selection_index(config: SelectionConfig) -> SelectionIndex:
    """Union identifiers from the command line and the identifier file."""
    ids = list(config.ids)
    if config.ids_file is not None:
        ids.extend(load_identifiers(config.ids_file))
    index = build_index(ids=ids, use_indices=config.use_indices)
    logger.debug(f"Built selection index with {len(index)} {'indices' if index.use_indices else 'identifiers'}")
    return index


def rename_index(config: RenameConfig) -> SelectionIndex:
    """Merge file and command line renames, command line entries win."""
    mapping = {}
    if config.map_file is not None:
        mapping.update(load_rename_map(config.map_file))
    mapping.update(parse_rename_pairs(config.pairs))
    return build_index(rename_map=mapping, use_indices=config.use_indices)


def run_select(config: SelectConfig) -> int:
    """Write the records matching the selection.

    Returns:
        Number of records written.
    """
    index = selection_index(config)
    found: set[str] = set()

    def matched(records: Iterable[Record]) -> Iterator[Record]:
        for record in index.filter(records):
            found.add(record.id)
            yield record

    with open_fastx(config.input_path, config.skip_invalid_quality) as reader, open_output(
        config.output_path
    ) as handle:
        writer = FastxWriter(handle, reader.format)
        n = writer.write_records(matched(reader))
        total = reader.records_read

    # Positions past the end of the stream are ignored without notice.
    if not index.use_indices:
        missing = index.keys - found
        if missing:
            logger.debug(f"{len(missing)} requested identifiers not found: {', '.join(sorted(map(str, missing)))}")
    logger.info(f"Selected {n} of {total} records")
    return n


def run_rename(config: RenameConfig) -> int:
    """Write all records with mapped identifiers replaced.

    Returns:
        Number of records written.
    """
    index = rename_index(config)
    with open_fastx(config.input_path, config.skip_invalid_quality) as reader, open_output(
        config.output_path
    ) as handle:
        writer = FastxWriter(handle, reader.format)
        return writer.write_records(index.rename(reader))


def add_to_id(record: Record, text: str, suffix: bool = False, separator: str = "") -> Record:
    if suffix:
        return record.with_id(f"{record.id}{separator}{text}")
    return record.with_id(f"{text}{separator}{record.id}")


def run_add_id(config: AddIdConfig) -> int:
    """Add text to the identifiers of selected records, or of all records.

    Returns:
        Number of records written.
    """
    index = selection_index(config)
    with open_fastx(config.input_path, config.skip_invalid_quality) as reader, open_output(
        config.output_path
    ) as handle:
        writer = FastxWriter(handle, reader.format)
        tagged = index.transform(reader, lambda r: add_to_id(r, config.text, config.suffix, config.separator))
        return writer.write_records(tagged)
