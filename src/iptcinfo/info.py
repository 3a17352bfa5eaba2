"""Read IPTC attributes from an image file or buffer.

``IPTCInfo.from_path`` is the usual entry point: it scans the first bytes of
the file for the IIM record 2 header, decodes the tags that follow and closes
the file. ``None`` means no IPTC data was found near the start of the file.
Changes made to an IPTCInfo object are never written back to the image.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from iptcinfo.config import IPTCConfig
from iptcinfo.datasets import KEYWORDS, SUPPLEMENTAL_CATEGORY
from iptcinfo.decoder import DecodedMetadata, StopReason, decode
from iptcinfo.scanner import NotFound, scan

logger = logging.getLogger(__name__)


@dataclass
class IPTCInfo:
    offset: int
    metadata: DecodedMetadata
    config: IPTCConfig

    @classmethod
    def from_source(cls, source: BinaryIO, config: IPTCConfig | None = None) -> IPTCInfo | None:
        config = config or IPTCConfig()
        found = scan(source, max_prefix=config.max_prefix)
        if isinstance(found, NotFound):
            logger.info("No IPTC data found in first %d bytes", config.max_prefix)
            return None
        metadata = decode(source)
        logger.debug(
            "Decoded %d tags from offset %d (stop: %s, skipped: %s)",
            metadata.tags_read,
            found.offset,
            metadata.stop_reason.value,
            metadata.skipped,
        )
        return cls(offset=found.offset, metadata=metadata, config=config)

    @classmethod
    def from_bytes(cls, data: bytes, config: IPTCConfig | None = None) -> IPTCInfo | None:
        return cls.from_source(io.BytesIO(data), config=config)

    @classmethod
    def from_path(cls, path: Path | str, config: IPTCConfig | None = None) -> IPTCInfo | None:
        with Path(path).open("rb") as f:
            return cls.from_source(f, config=config)

    def _text(self, value: bytes) -> str:
        return value.decode(self.config.encoding, errors=self.config.errors)

    def attribute(self, name: str) -> str | None:
        """Value of a single-valued attribute, e.g. ``"caption/abstract"``."""
        value = self.metadata.scalars.get(name)
        return self._text(value) if value is not None else None

    def list_attribute(self, name: str) -> list[str]:
        return [self._text(v) for v in self.metadata.lists.get(name, [])]

    @property
    def keywords(self) -> list[str]:
        return self.list_attribute(KEYWORDS)

    @property
    def supplemental_categories(self) -> list[str]:
        return self.list_attribute(SUPPLEMENTAL_CATEGORY)

    @property
    def data(self) -> dict[str, str]:
        return {name: self._text(v) for name, v in self.metadata.scalars.items()}

    @property
    def list_data(self) -> dict[str, list[str]]:
        return {name: self.list_attribute(name) for name in self.metadata.lists}

    @property
    def stop_reason(self) -> StopReason:
        return self.metadata.stop_reason
