#!/usr/bin/env python3
"""
seqtools, index.py - Record selection and renaming by identifier or position.
=============================================================================

The index is built once from command line values and/or files, then applied
to a record stream in a single pass. Output always follows input order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from seqtools.core.records import Record

Key = str | int


def parse_index(value: str | int) -> int:
    """Parse a zero-based record position.

    Raises:
        ValueError: The value is not a non-negative integer.
    """
    try:
        index = int(value)
    except ValueError as e:
        raise ValueError(f"Invalid record index '{value}': indices must be integers") from e
    if index < 0:
        raise ValueError(f"Invalid record index '{value}': indices must be non-negative")
    return index


def load_identifiers(path: str | Path) -> list[str]:
    """Read identifiers from a file, one per line.

    Blank lines and lines starting with '#' are ignored, only the first
    whitespace-delimited token of each line is kept.
    """
    identifiers = []
    with Path(path).open() as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                identifiers.append(line.split()[0])
    return identifiers


def load_rename_map(path: str | Path) -> dict[str, str]:
    """Read a two column (old, new) whitespace separated file."""
    mapping = {}
    with Path(path).open() as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            fields = line.split()
            if len(fields) != 2:
                raise ValueError(f"{path}:{lineno}: expected 2 columns (old, new), found {len(fields)}")
            mapping[fields[0]] = fields[1]
    return mapping


def parse_rename_pairs(pairs: Iterable[str]) -> dict[str, str]:
    """Parse ``OLD=NEW`` arguments into a mapping.

    Raises:
        ValueError: A pair has no '=', an empty side, or whitespace in NEW.
    """
    mapping = {}
    for pair in pairs:
        old, sep, new = pair.partition("=")
        if not sep or not old or not new:
            raise ValueError(f"Invalid rename '{pair}', expected OLD=NEW")
        if any(c.isspace() for c in new):
            raise ValueError(f"Invalid rename '{pair}': new identifier must not contain whitespace")
        mapping[old] = new
    return mapping


@dataclass
class SelectionIndex:
    """Lookup over record identifiers or zero-based record positions.

    Attributes:
        use_indices: Match on stream position instead of identifier.
        keys: Identifiers or positions to match.
        rename_map: Replacement identifier for each key, if renaming.
    """

    use_indices: bool = False
    keys: set[Key] = field(default_factory=set)
    rename_map: dict[Key, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.keys)

    def _key(self, position: int, record: Record) -> Key:
        return position if self.use_indices else record.id

    def matches(self, position: int, record: Record) -> bool:
        return self._key(position, record) in self.keys

    def filter(self, records: Iterable[Record]) -> Iterator[Record]:
        """Yield the matched records in stream order."""
        for position, record in enumerate(records):
            if self._key(position, record) in self.keys:
                yield record

    def rename(self, records: Iterable[Record]) -> Iterator[Record]:
        """Yield every record, replacing identifiers found in the rename map."""
        for position, record in enumerate(records):
            new_id = self.rename_map.get(self._key(position, record))
            yield record.with_id(new_id) if new_id is not None else record

    def transform(self, records: Iterable[Record], func: Callable[[Record], Record]) -> Iterator[Record]:
        """Yield every record, applying ``func`` to the matched ones.

        An empty index matches every record.
        """
        for position, record in enumerate(records):
            if not self.keys or self._key(position, record) in self.keys:
                yield func(record)
            else:
                yield record


def build_index(
    ids: Iterable[str] | None = None,
    indices: Iterable[str | int] | None = None,
    rename_map: dict[str, str] | None = None,
    use_indices: bool = False,
) -> SelectionIndex:
    """Build a selection or rename index.

    Args:
        ids: Identifiers to match. Interpreted as positions if ``use_indices``.
        indices: Zero-based record positions to match.
        rename_map: Mapping of identifier (or position) to new identifier.
            Its keys are added to the selection.
        use_indices: Match positions instead of identifiers.

    Returns:
        SelectionIndex with all sources unioned.

    Raises:
        ValueError: A position is negative or not an integer.
    """
    if indices is not None:
        use_indices = True

    values: list[str | int] = list(ids or []) + list(indices or [])
    renames = dict(rename_map or {})
    values.extend(renames)

    if use_indices:
        keys: set[Key] = {parse_index(v) for v in values}
        mapping: dict[Key, str] = {parse_index(k): v for k, v in renames.items()}
    else:
        keys = {str(v) for v in values}
        mapping = dict(renames)

    return SelectionIndex(use_indices=use_indices, keys=keys, rename_map=mapping)
