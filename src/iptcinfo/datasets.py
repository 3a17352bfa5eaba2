"""IIM record 2 dataset tables.

Names match the codes defined in IPTC's IIM record 2 (version 4). Repeating
datasets (keywords, supplemental categories) live in LIST_DATASETS; everything
else decoded as a single value lives in SCALAR_DATASETS. Ids in neither table
are skipped by the decoder:
- 0 record version (binary)
- 125 rasterized caption (binary)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

SCALAR_DATASETS: Mapping[int, str] = MappingProxyType(
    {
        5: "object name",
        7: "edit status",
        8: "editorial update",
        10: "urgency",
        12: "subject reference",
        15: "category",
        22: "fixture identifier",
        26: "content location code",
        27: "content location name",
        30: "release date",
        35: "release time",
        37: "expiration date",
        38: "expiration time",
        40: "special instructions",
        42: "action advised",
        45: "reference service",
        47: "reference date",
        50: "reference number",
        55: "date created",
        60: "time created",
        62: "digital creation date",
        63: "digital creation time",
        65: "originating program",
        70: "program version",
        75: "object cycle",
        80: "by-line",
        85: "by-line title",
        90: "city",
        92: "sub-location",
        95: "province/state",
        100: "country/primary location code",
        101: "country/primary location name",
        103: "original transmission reference",
        105: "headline",
        110: "credit",
        115: "source",
        116: "copyright notice",
        118: "contact",
        120: "caption/abstract",
        122: "writer/editor",
        130: "image type",
        131: "image orientation",
        135: "language identifier",
    }
)

LIST_DATASETS: Mapping[int, str] = MappingProxyType(
    {
        20: "supplemental category",
        25: "keywords",
    }
)

KEYWORDS = LIST_DATASETS[25]
SUPPLEMENTAL_CATEGORY = LIST_DATASETS[20]


class DatasetKind(str, Enum):
    SCALAR = "scalar"
    LIST = "list"


@dataclass(frozen=True)
class DatasetRegistry:
    """Read-only pair of dataset tables handed to the decoder by reference."""

    scalars: Mapping[int, str] = field(default_factory=lambda: SCALAR_DATASETS)
    lists: Mapping[int, str] = field(default_factory=lambda: LIST_DATASETS)

    def __post_init__(self) -> None:
        shared = sorted(set(self.scalars.values()) & set(self.lists.values()))
        if shared:
            raise ValueError(f"Attribute names in both tables: {', '.join(shared)}")
        for name in ("scalars", "lists"):
            table = getattr(self, name)
            if not isinstance(table, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(table)))

    def lookup(self, dataset: int) -> tuple[DatasetKind, str] | None:
        # list table wins so a repeating dataset is never stored as a scalar
        if dataset in self.lists:
            return DatasetKind.LIST, self.lists[dataset]
        if dataset in self.scalars:
            return DatasetKind.SCALAR, self.scalars[dataset]
        return None

    def names(self) -> list[str]:
        """All attribute names, scalar vocabulary first, in dataset-id order."""
        return [self.scalars[k] for k in sorted(self.scalars)] + [
            self.lists[k] for k in sorted(self.lists)
        ]

    def dataset_name(self, dataset: int) -> str | None:
        found = self.lookup(dataset)
        return found[1] if found else None


DEFAULT_REGISTRY = DatasetRegistry()
