import io

import pandas as pd
import pytest
from openpyxl import Workbook

from helpers import csv_bytes, xlsx_bytes
from roster_core.dedup import dedup_key
from roster_core.errors import (
    EmptySheet,
    FileTooLarge,
    MissingRequiredColumn,
    UnreadableSheet,
    UnsupportedFormat,
)
from roster_core.io import (
    check_extension,
    export_csv_bytes,
    export_xlsx_bytes,
    parse_file,
    parse_rows,
    read_rows,
    sample_xlsx_bytes,
)
from roster_core.aliases import resolve_headers
from roster_core.models import GLOBAL_FIELDS, Participant


def test_basic_scenario_rows():
    rows = [["이름", "이메일"], ["홍길동", "hong@example.com"], ["", ""]]
    result = parse_rows(rows, resolve_headers(rows[0]))
    assert [p.to_record() for p in result.rows] == [{"name": "홍길동", "email": "hong@example.com"}]
    assert result.warnings == ["3행: 이름이 비어 있어 제외했습니다."]


def test_whitespace_name_rejected_once_per_row():
    rows = [["name", "email"], ["   ", "a@example.com"], ["B", ""], [None, None]]
    result = parse_rows(rows, resolve_headers(rows[0]))
    assert [p.name for p in result.rows] == ["B"]
    assert result.warnings == [
        "2행: 이름이 비어 있어 제외했습니다.",
        "4행: 이름이 비어 있어 제외했습니다.",
    ]


def test_empty_cells_are_omitted_and_short_rows_tolerated():
    rows = [["이름", "전화번호", "회사"], ["A", "  "], ["B", "010-1", "X"]]
    result = parse_rows(rows, resolve_headers(rows[0]))
    assert result.rows[0].to_record() == {"name": "A"}
    assert result.rows[1].to_record() == {"name": "B", "phone": "010-1", "company": "X"}


def test_unmapped_columns_dropped():
    rows = [["이름", "티켓구분"], ["A", "VIP"]]
    result = parse_rows(rows, resolve_headers(rows[0]))
    assert result.rows[0].to_record() == {"name": "A"}


def test_check_extension():
    assert check_extension("Roster.XLSX") == "xlsx"
    assert check_extension("a.b.csv") == "csv"
    with pytest.raises(UnsupportedFormat):
        check_extension("roster.pdf")
    with pytest.raises(UnsupportedFormat):
        check_extension("roster")


def test_unsupported_format_checked_before_reading():
    with pytest.raises(UnsupportedFormat):
        parse_file(b"\x00garbage", "roster.txt")


def test_read_csv_keeps_text_and_row_positions():
    data = csv_bytes("이름,전화번호\n,010-0000-0000\n홍길동,01011112222\n\n")
    rows = read_rows(data, "r.csv")
    assert len(rows) == 3
    result = parse_file(data, "r.csv")
    assert result.rows[0].phone == "01011112222"
    assert result.warnings == ["2행: 이름이 비어 있어 제외했습니다."]


def test_read_csv_with_bom_and_cp949():
    assert parse_file("\ufeff이름\n가\n".encode("utf-8"), "a.csv").rows[0].name == "가"
    assert parse_file("이름\n나\n".encode("cp949"), "a.csv").rows[0].name == "나"


def test_empty_csv():
    with pytest.raises(EmptySheet):
        read_rows(b"", "a.csv")
    with pytest.raises(EmptySheet):
        read_rows(b"\n\n", "a.csv")


def test_read_xlsx_first_sheet_and_numbers():
    data = xlsx_bytes([["이름", "휴대폰", "Company"], ["홍길동", 1012345678, "BTW"], ["김철수", None, None]])
    result = parse_file(data, "r.xlsx")
    assert result.rows[0].to_record() == {"name": "홍길동", "phone": "1012345678", "company": "BTW"}
    assert result.rows[1].to_record() == {"name": "김철수"}


def test_xlsx_missing_name_column():
    data = xlsx_bytes([["이메일"], ["a@example.com"]])
    with pytest.raises(MissingRequiredColumn):
        parse_file(data, "r.xlsx")


def test_empty_workbook():
    buf = io.BytesIO()
    Workbook().save(buf)
    with pytest.raises(EmptySheet):
        read_rows(buf.getvalue(), "empty.xlsx")


def test_unreadable_workbook():
    with pytest.raises(UnreadableSheet):
        read_rows(b"definitely not a zip", "broken.xlsx")


def test_file_too_large():
    with pytest.raises(FileTooLarge):
        read_rows(csv_bytes("이름\nA\n"), "a.csv", max_bytes=3)


def test_export_headers_follow_field_order():
    df = pd.read_excel(io.BytesIO(export_xlsx_bytes([], GLOBAL_FIELDS)), engine="openpyxl")
    assert list(df.columns) == ["이름", "이메일", "전화번호", "회사", "직함/역할"]


def test_sample_template_parses():
    result = parse_file(sample_xlsx_bytes(), "sample.xlsx")
    assert [p.name for p in result.rows] == ["홍길동", "김철수"]
    assert result.rows[0].note == "샘플 데이터"
    assert result.warnings == []


def test_round_trip_preserves_keys_and_values():
    people = [
        Participant(name="A", email="a@example.com", phone="010-1111-2222", role="매니저", note="n"),
        Participant(name="B", phone="01033334444", company="Co"),
        Participant(name="C"),
    ]
    for data, name in [(export_xlsx_bytes(people), "out.xlsx"), (export_csv_bytes(people), "out.csv")]:
        back = parse_file(data, name).rows
        assert {dedup_key(p) for p in back} == {dedup_key(p) for p in people}
        assert [p.to_record() for p in back] == [p.to_record() for p in people]


def test_csv_rows_wider_than_header():
    result = parse_file(csv_bytes("이름,이메일\nA,a@example.com,extra\nB,b@example.com\nC,,memo,more\n"), "r.csv")
    assert [p.to_record() for p in result.rows] == [
        {"name": "A", "email": "a@example.com"},
        {"name": "B", "email": "b@example.com"},
        {"name": "C"},
    ]
    assert result.warnings == []
    assert result.header_map == ["name", "email", None, None]


def test_csv_trailing_comma_rows():
    result = parse_file(csv_bytes("이름,회사\n홍길동,BTW,\n김철수,\n"), "r.csv")
    assert [p.to_record() for p in result.rows] == [{"name": "홍길동", "company": "BTW"}, {"name": "김철수"}]


def test_parse_file_reports_header_mapping():
    result = parse_file(csv_bytes("이름,Email,기타\nA,a@example.com,x\n"), "r.csv")
    assert result.mapping == "이름→name, Email→email"
