"""Export decoded IPTC attributes as XML, SQL, JSON payloads, JSONL or Arrow."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape

import pyarrow as pa
import pyarrow.ipc as pa_ipc

from iptcinfo.info import IPTCInfo


def _xml_tag(name: str) -> str:
    """Attribute names become tags: spaces to underbars, slashes to dashes."""
    return name.replace(" ", "_").replace("/", "-")


def export_xml(
    info: IPTCInfo,
    basetag: str = "photo",
    extra: Mapping[str, object] | None = None,
    output: Path | None = None,
) -> str:
    """Render all attributes inside a ``basetag`` entity.

    Extra entries come first and their keys must already be valid tag names.
    """
    basetag = basetag or "photo"
    lines = [f"<{basetag}>"]
    for key, value in (extra or {}).items():
        lines.append(f"\t<{key}>{escape(str(value))}</{key}>")
    for name, value in info.data.items():
        tag = _xml_tag(name)
        lines.append(f"\t<{tag}>{escape(value)}</{tag}>")

    keywords = info.keywords
    if keywords:
        lines.append("\t<keywords>")
        lines.extend(f"\t\t<keyword>{escape(k)}</keyword>" for k in keywords)
        lines.append("\t</keywords>")

    categories = info.supplemental_categories
    if categories:
        lines.append("\t<supplemental_categories>")
        lines.extend(
            f"\t\t<supplemental_category>{escape(c)}</supplemental_category>" for c in categories
        )
        lines.append("\t</supplemental_categories>")

    lines.append(f"</{basetag}>")
    xml = "\n".join(lines) + "\n"

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(xml, encoding="utf-8")
    return xml


def _sql_literal(value: object) -> str:
    text = "" if value is None else str(value)
    return "'" + text.replace("'", "''") + "'"


def export_sql(
    info: IPTCInfo,
    table: str,
    mappings: Mapping[str, str],
    extra: Mapping[str, object] | None = None,
) -> str:
    """Build an INSERT statement mapping IPTC attribute names to table columns.

    Extra columns come first; attributes missing from the image insert ''.
    """
    if not table or not mappings:
        raise ValueError("export_sql needs a table name and at least one mapping")
    columns: list[str] = []
    values: list[str] = []
    for column, value in (extra or {}).items():
        columns.append(column)
        values.append(_sql_literal(value))
    for attribute, column in mappings.items():
        columns.append(column)
        values.append(_sql_literal(info.attribute(attribute)))
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(values)})"


def info_to_payload(info: IPTCInfo | None, source: str | None = None) -> dict[str, Any]:
    """Flatten an IPTCInfo (or its absence) into a JSON-friendly mapping."""
    if info is None:
        return {
            "source": source,
            "found": False,
            "offset": None,
            "stop_reason": None,
            "attributes": {},
            "keywords": [],
            "supplemental_categories": [],
            "skipped_datasets": [],
        }
    return {
        "source": source,
        "found": True,
        "offset": info.offset,
        "stop_reason": info.stop_reason.value,
        "attributes": info.data,
        "keywords": info.keywords,
        "supplemental_categories": info.supplemental_categories,
        "skipped_datasets": list(info.metadata.skipped),
    }


def payloads_to_jsonl(payloads: Sequence[Mapping[str, Any]], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for payload in payloads:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")


def payloads_to_arrow(payloads: Sequence[Mapping[str, Any]], path: Path) -> None:
    """Write payloads to Arrow IPC for analytics-friendly consumption."""
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.table(
        {
            "source": pa.array([p.get("source") for p in payloads], type=pa.string()),
            "found": pa.array([bool(p.get("found")) for p in payloads], type=pa.bool_()),
            "offset": pa.array([p.get("offset") for p in payloads], type=pa.int64()),
            "stop_reason": pa.array([p.get("stop_reason") for p in payloads], type=pa.string()),
            # attribute names vary per image; keep the schema fixed
            "attributes": pa.array(
                [json.dumps(p.get("attributes") or {}, ensure_ascii=False) for p in payloads],
                type=pa.string(),
            ),
            "keywords": pa.array(
                [list(p.get("keywords") or []) for p in payloads], type=pa.list_(pa.string())
            ),
            "supplemental_categories": pa.array(
                [list(p.get("supplemental_categories") or []) for p in payloads],
                type=pa.list_(pa.string()),
            ),
        }
    )
    with pa.OSFile(str(path), "wb") as sink:
        with pa_ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
