"""Sequential IIM record 2 tag decoder.

Expects the source positioned at the header returned by ``scanner.scan`` and
walks tags until the first one that is not a record 2 continuation. Every
anomaly (short header, foreign record, short value) ends the walk cleanly;
the reason is kept on the result instead of being raised.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO

from iptcinfo.datasets import DEFAULT_REGISTRY, DatasetKind, DatasetRegistry
from iptcinfo.scanner import APPLICATION_RECORD, IIM_MARKER

HEADER = struct.Struct(">BBBH")


class StopReason(str, Enum):
    END_OF_SOURCE = "end_of_source"
    TRUNCATED_HEADER = "truncated_header"
    END_OF_RECORD = "end_of_record"
    TRUNCATED_VALUE = "truncated_value"


@dataclass(frozen=True)
class TagHeader:
    marker: int
    record: int
    dataset: int
    length: int

    @property
    def is_continuation(self) -> bool:
        return self.marker == IIM_MARKER and self.record == APPLICATION_RECORD


@dataclass
class DecodedMetadata:
    scalars: dict[str, bytes] = field(default_factory=dict)
    lists: dict[str, list[bytes]] = field(default_factory=dict)
    stop_reason: StopReason = StopReason.END_OF_SOURCE
    skipped: list[int] = field(default_factory=list)
    tags_read: int = 0


def read_tag_header(source: BinaryIO) -> TagHeader | StopReason:
    """Read one 5-byte header, or report why there isn't one."""
    raw = source.read(HEADER.size)
    if not raw:
        return StopReason.END_OF_SOURCE
    if len(raw) < HEADER.size:
        return StopReason.TRUNCATED_HEADER
    return TagHeader(*HEADER.unpack(raw))


def _walk(source: BinaryIO) -> Iterator[tuple[TagHeader, bytes] | StopReason]:
    while True:
        header = read_tag_header(source)
        if isinstance(header, StopReason):
            yield header
            return
        if not header.is_continuation:
            yield StopReason.END_OF_RECORD
            return
        value = source.read(header.length)
        if len(value) < header.length:
            yield StopReason.TRUNCATED_VALUE
            return
        yield header, value


def iter_tags(source: BinaryIO) -> Iterator[tuple[TagHeader, bytes]]:
    """Yield every well-formed record 2 tag, including unsupported datasets."""
    for item in _walk(source):
        if isinstance(item, StopReason):
            return
        yield item


def decode(source: BinaryIO, registry: DatasetRegistry = DEFAULT_REGISTRY) -> DecodedMetadata:
    """Collect record 2 tags into scalar and list attributes."""
    result = DecodedMetadata()
    for item in _walk(source):
        if isinstance(item, StopReason):
            result.stop_reason = item
            break
        header, value = item
        result.tags_read += 1
        found = registry.lookup(header.dataset)
        if found is None:
            result.skipped.append(header.dataset)
            continue
        kind, name = found
        if kind is DatasetKind.LIST:
            result.lists.setdefault(name, []).append(value)
        else:
            result.scalars[name] = value
    return result
