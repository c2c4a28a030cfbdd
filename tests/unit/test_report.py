from __future__ import annotations

import pytest

from ribs.records import FillRecord, LiteralRecord
from ribs.report import describe_record, describe_records, quote_byte


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0x2A, '"*"'),
        (0x41, '"A"'),
        (0x00, '"\\x00"'),
        (0xFF, '"\\xFF"'),
        (0x22, '"\\""'),
        (0x5C, '"\\\\"'),
        (0x0A, '"\\n"'),
        (0x09, '"\\t"'),
        (0x0D, '"\\r"'),
        (0x1B, '"\\e"'),
        (0x07, '"\\a"'),
        (0x08, '"\\b"'),
        (0x0C, '"\\f"'),
        (0x0B, '"\\v"'),
        (0x7F, '"\\x7F"'),
    ],
)
def test_quote_byte(value: int, expected: str) -> None:
    assert quote_byte(value) == expected


def test_describe_literal_record_uses_hex_offset() -> None:
    record = LiteralRecord(offset=0x1A2B, data=b"\x00" * 12)

    assert describe_record(record, 3) == "Record No.: 3, Type: Normal, Offset: 1a2b, Bytes: 12"


def test_describe_fill_record_includes_repeat_and_value() -> None:
    record = FillRecord(offset=0xFF, length=0, value=0x41)

    assert describe_record(record, 1) == 'Record No.: 1, Type: RLE,    Offset: ff, Repeat: 0, Value: "A"'


def test_describe_records_numbers_from_one() -> None:
    lines = list(describe_records([LiteralRecord(offset=0, data=b"a"), LiteralRecord(offset=1, data=b"b")]))

    assert [line.split(",")[0] for line in lines] == ["Record No.: 1", "Record No.: 2"]
