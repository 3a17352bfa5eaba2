from __future__ import annotations

import codecs
import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from iptcinfo.scanner import MAX_PREFIX


@dataclass
class IPTCConfig:
    max_prefix: int = MAX_PREFIX
    encoding: str = "latin-1"
    errors: str = "replace"
    xml_basetag: str = "photo"
    sql_table: str | None = None
    sql_mappings: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> IPTCConfig:
        if not isinstance(payload, dict):
            raise ValueError(f"Config must be a mapping, got {type(payload).__name__}")
        known = {f.name for f in fields(IPTCConfig)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        max_prefix = int(payload.get("max_prefix", MAX_PREFIX))
        if max_prefix < 0:
            raise ValueError("max_prefix must be non-negative")
        mappings = payload.get("sql_mappings") or {}
        if not isinstance(mappings, dict):
            raise ValueError("sql_mappings must map attribute names to column names")
        encoding = str(payload.get("encoding", "latin-1"))
        errors = str(payload.get("errors", "replace"))
        try:
            codecs.lookup(encoding)
            codecs.lookup_error(errors)
        except LookupError as exc:
            raise ValueError(f"Bad text decoding setting: {exc}") from exc
        return IPTCConfig(
            max_prefix=max_prefix,
            encoding=encoding,
            errors=errors,
            xml_basetag=str(payload.get("xml_basetag") or "photo"),
            sql_table=payload.get("sql_table"),
            sql_mappings={str(k): str(v) for k, v in mappings.items()},
        )


def load_config(path: Path) -> IPTCConfig:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text())
    else:
        payload = json.loads(path.read_text())
    return IPTCConfig.from_mapping(payload or {})


def sample_config() -> dict[str, Any]:
    return {
        "max_prefix": MAX_PREFIX,
        "encoding": "latin-1",
        "errors": "replace",
        "xml_basetag": "photo",
        "sql_table": "photos",
        "sql_mappings": {
            "caption/abstract": "caption",
            "city": "city",
            "province/state": "state",
        },
    }
