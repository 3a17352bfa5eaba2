"""Synthetic image-like byte streams carrying an IIM record 2 block.

Layout of a generated file:
- arbitrary binary prefix (never containing a 0x1C byte)
- record version tag (record 2, dataset 0) with a 2-byte version value
- scalar tags and repeated keyword tags with random text
- a trailing record 7 tag that ends the record 2 block

Used for fixtures, benchmarks and regression tests in place of real JPEGs.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from iptcinfo.datasets import KEYWORDS, SCALAR_DATASETS
from iptcinfo.scanner import APPLICATION_RECORD, IIM_MARKER, RECORD_VERSION_DATASET

IIM_VERSION = 4
NON_MARKER_BYTES = [b for b in range(256) if b != IIM_MARKER]
WORDS: Sequence[str] = (
    "harbour",
    "sunset",
    "van",
    "burger",
    "parking",
    "night",
    "press",
    "market",
    "river",
    "station",
    "portrait",
    "crowd",
)


def build_tag(dataset: int, value: bytes, record: int = APPLICATION_RECORD) -> bytes:
    """Marker, record, dataset, 2-byte big-endian length, then the value."""
    if len(value) > 0xFFFF:
        raise ValueError("IIM values are limited to 65535 bytes without extended lengths")
    return bytes([IIM_MARKER, record, dataset]) + len(value).to_bytes(2, "big") + value


def version_tag(version: int = IIM_VERSION) -> bytes:
    return build_tag(RECORD_VERSION_DATASET, version.to_bytes(2, "big"))


def build_iim_block(tags: Iterable[tuple[int, bytes]], version: int = IIM_VERSION) -> bytes:
    """Version tag followed by the given (dataset, value) record 2 tags."""
    return version_tag(version) + b"".join(build_tag(ds, value) for ds, value in tags)


def _prefix(rng: random.Random, size: int) -> bytes:
    return bytes(rng.choice(NON_MARKER_BYTES) for _ in range(size))


def generate_synthetic_image(
    *,
    seed: int = 1234,
    prefix_bytes: int = 50,
    scalar_count: int = 6,
    keyword_count: int = 3,
) -> tuple[bytes, dict]:
    """Build a stream plus the attributes a decoder should recover from it."""
    rng = random.Random(seed)
    datasets = rng.sample(sorted(SCALAR_DATASETS), k=min(scalar_count, len(SCALAR_DATASETS)))
    tags: list[tuple[int, bytes]] = []
    attributes: dict[str, str] = {}
    for ds in datasets:
        text = " ".join(rng.choice(WORDS) for _ in range(rng.randint(1, 4)))
        tags.append((ds, text.encode("latin-1")))
        attributes[SCALAR_DATASETS[ds]] = text

    keywords = [rng.choice(WORDS) for _ in range(keyword_count)]
    tags.extend((25, k.encode("latin-1")) for k in keywords)

    data = (
        _prefix(rng, prefix_bytes)
        + build_iim_block(tags)
        + build_tag(10, b"\x00\x00", record=7)
        + _prefix(rng, 16)
    )
    metadata = {
        "seed": seed,
        "offset": prefix_bytes,
        "attributes": attributes,
        KEYWORDS: keywords,
        "byte_length": len(data),
    }
    return data, metadata
