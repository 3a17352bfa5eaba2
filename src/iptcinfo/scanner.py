"""Locate the first IIM record 2 header near the start of a byte source.

Writers conventionally place IIM data near the front of the file, so the scan
is bounded to the first MAX_PREFIX bytes rather than reading whole images to
prove absence. Metadata stored further in (or at the end of the file) is not
found; callers can retry with a larger bound.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

IIM_MARKER = 0x1C
APPLICATION_RECORD = 2
RECORD_VERSION_DATASET = 0
MAX_PREFIX = 512


@dataclass(frozen=True)
class Found:
    offset: int


@dataclass(frozen=True)
class NotFound:
    pass


ScanResult = Found | NotFound
NOT_FOUND = NotFound()


def scan(source: BinaryIO, max_prefix: int = MAX_PREFIX) -> ScanResult:
    """Find the record 2 / dataset 0 header within offsets 0..max_prefix.

    On success the source is left positioned at the header's marker byte.
    """
    source.seek(0)
    offset = 0
    while offset <= max_prefix:
        byte = source.read(1)
        if not byte:
            return NOT_FOUND
        if byte[0] == IIM_MARKER:
            lookahead = source.read(2)
            if (
                len(lookahead) == 2
                and lookahead[0] == APPLICATION_RECORD
                and lookahead[1] == RECORD_VERSION_DATASET
            ):
                source.seek(offset)
                return Found(offset)
            # lookahead bytes may hold the real marker; rescan them
            source.seek(offset + 1)
        offset += 1
    return NOT_FOUND
