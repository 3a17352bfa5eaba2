import logging
from pathlib import Path

import pytest

from iptcinfo.config import IPTCConfig
from iptcinfo.decoder import StopReason
from iptcinfo.info import IPTCInfo
from iptcinfo.synthetic import build_iim_block, build_tag

CAPTION = "A van full of burgers awaits mysterious buyers in a dark parking lot."


def _image_bytes() -> bytes:
    block = build_iim_block(
        [
            (120, CAPTION.encode("latin-1")),
            (90, "Zürich".encode("latin-1")),
            (25, b"van"),
            (25, b"burger"),
            (20, b"food"),
        ]
    )
    return b"\xff\xd8\xff\xed" + b"\x00" * 26 + block + build_tag(0, b"", record=8)


def test_from_path_reads_attributes(tmp_path: Path):
    path = tmp_path / "burger_van.jpg"
    path.write_bytes(_image_bytes())
    info = IPTCInfo.from_path(path)
    assert info is not None
    assert info.offset == 30
    assert info.attribute("caption/abstract") == CAPTION
    assert info.attribute("city") == "Zürich"
    assert info.attribute("headline") is None
    assert info.keywords == ["van", "burger"]
    assert info.supplemental_categories == ["food"]
    assert info.stop_reason is StopReason.END_OF_RECORD


def test_missing_lists_are_empty():
    info = IPTCInfo.from_bytes(build_iim_block([(105, b"news")]))
    assert info is not None
    assert info.keywords == []
    assert info.list_data == {}
    assert info.data == {"headline": "news"}


def test_no_iptc_data_returns_none(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.INFO, logger="iptcinfo.info"):
        assert IPTCInfo.from_bytes(b"\x00" * 600) is None
    assert "No IPTC data found" in caplog.text


def test_config_bound_and_encoding():
    data = b"\x00" * 700 + build_iim_block([(80, "Renée".encode("utf-8"))])
    assert IPTCInfo.from_bytes(data) is None
    info = IPTCInfo.from_bytes(data, config=IPTCConfig(max_prefix=1024, encoding="utf-8"))
    assert info is not None
    assert info.attribute("by-line") == "Renée"


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        IPTCInfo.from_path(tmp_path / "absent.jpg")
