import io

from iptcinfo.decoder import StopReason, TagHeader, decode, iter_tags, read_tag_header
from iptcinfo.scanner import Found, scan
from iptcinfo.synthetic import build_iim_block, build_tag


def _decode(data: bytes):
    source = io.BytesIO(data)
    assert isinstance(scan(source), Found)
    return decode(source)


def test_decode_scalars_and_lists_in_stream_order():
    data = build_iim_block([(116, b"ok"), (25, b"alpha"), (25, b"beta")])
    result = _decode(data)
    assert result.scalars == {"copyright notice": b"ok"}
    assert result.lists == {"keywords": [b"alpha", b"beta"]}
    assert result.stop_reason is StopReason.END_OF_SOURCE


def test_decode_last_scalar_wins():
    result = _decode(build_iim_block([(105, b"A"), (105, b"B")]))
    assert result.scalars["headline"] == b"B"


def test_decode_keeps_duplicate_list_values():
    result = _decode(build_iim_block([(20, b"x"), (25, b"k"), (20, b"x")]))
    assert result.lists["supplemental category"] == [b"x", b"x"]
    assert result.lists["keywords"] == [b"k"]
    assert not set(result.lists) & set(result.scalars)


def test_decode_truncated_value_keeps_prior_attributes():
    data = build_iim_block([(90, b"Oslo")]) + b"\x1c\x02\x69\x00\x0a" + b"abcd"
    result = _decode(data)
    assert result.scalars == {"city": b"Oslo"}
    assert "headline" not in result.scalars
    assert result.stop_reason is StopReason.TRUNCATED_VALUE


def test_decode_truncated_header_stops_cleanly():
    data = build_iim_block([(90, b"Oslo")]) + b"\x1c\x02"
    result = _decode(data)
    assert result.scalars == {"city": b"Oslo"}
    assert result.stop_reason is StopReason.TRUNCATED_HEADER


def test_decode_discards_unknown_dataset():
    data = build_iim_block([(105, b"before"), (200, b"mystery"), (120, b"after")])
    result = _decode(data)
    assert result.scalars == {"headline": b"before", "caption/abstract": b"after"}
    assert result.lists == {}
    # version tag (0) is read but never stored
    assert result.skipped == [0, 200]
    assert result.tags_read == 4


def test_decode_stops_at_foreign_record():
    data = (
        build_iim_block([(120, b"cat")])
        + build_tag(10, b"\x00\x00", record=7)
        + build_tag(105, b"never")
    )
    result = _decode(data)
    assert result.scalars == {"caption/abstract": b"cat"}
    assert result.stop_reason is StopReason.END_OF_RECORD


def test_decode_stops_at_missing_marker():
    data = build_iim_block([(120, b"cat")]) + b"\xff\xd9" + build_tag(105, b"never")
    result = _decode(data)
    assert result.scalars == {"caption/abstract": b"cat"}
    assert result.stop_reason is StopReason.END_OF_RECORD


def test_decode_end_to_end_scenario():
    prefix = bytes((i * 7) % 28 for i in range(50))
    data = (
        prefix
        + b"\x1c\x02\x00\x00\x00"
        + b"\x1c\x02\x78\x00\x03cat"
        + b"\x1c\x07\x0a\x00\x00"
    )
    source = io.BytesIO(data)
    assert scan(source) == Found(50)
    result = decode(source)
    assert result.scalars == {"caption/abstract": b"cat"}
    assert result.stop_reason is StopReason.END_OF_RECORD
    # the foreign header was read but its value never consumed
    assert source.tell() == len(data)


def test_decode_is_deterministic_across_passes():
    data = build_iim_block([(116, b"ok"), (25, b"alpha"), (200, b"?"), (25, b"beta")])
    assert _decode(data) == _decode(data)


def test_read_tag_header_fields_and_stop_reasons():
    header = read_tag_header(io.BytesIO(b"\x1c\x02\x19\x01\x02"))
    assert header == TagHeader(marker=0x1C, record=2, dataset=25, length=258)
    assert header.is_continuation
    assert read_tag_header(io.BytesIO(b"")) is StopReason.END_OF_SOURCE
    assert read_tag_header(io.BytesIO(b"\x1c\x02")) is StopReason.TRUNCATED_HEADER


def test_iter_tags_yields_unsupported_datasets_too():
    source = io.BytesIO(build_iim_block([(125, b"\x00\x01"), (5, b"name")]))
    scan(source)
    datasets = [(header.dataset, value) for header, value in iter_tags(source)]
    assert datasets == [(0, b"\x00\x04"), (125, b"\x00\x01"), (5, b"name")]
