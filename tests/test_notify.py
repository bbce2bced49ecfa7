from helpers import csv_bytes, xlsx_bytes
from roster_core.io import sample_xlsx_bytes
from roster_core.models import Participant
from roster_core.notify import (
    RECIPIENT_FIELDS,
    add_rows,
    count_valid_emails,
    detect_email_column,
    pick_recipients,
    read_recipient_file,
    render_message,
    row_key,
    search_candidates,
)


def test_read_recipient_file_skips_blank_rows():
    data = xlsx_bytes([["이름", "이메일", "메모"], ["홍길동", "hong@example.com", ""], ["", "", ""], ["김철수", "bad", "x"]])
    headers, rows = read_recipient_file(data, "list.xlsx")
    assert headers == ["이름", "이메일", "메모"]
    assert rows == [
        {"이름": "홍길동", "이메일": "hong@example.com", "메모": ""},
        {"이름": "김철수", "이메일": "bad", "메모": "x"},
    ]


def test_blank_header_cells_get_placeholder_names():
    headers, rows = read_recipient_file(csv_bytes("email,\na@example.com,x\n"), "a.csv")
    assert headers == ["email", "column2"]
    assert rows == [{"email": "a@example.com", "column2": "x"}]


def test_detect_email_column_and_count():
    assert detect_email_column(["이름", " E-mail "]) == " E-mail "
    assert detect_email_column(["이름", "전화"]) == ""
    rows = [{"메일": "a@example.com"}, {"메일": "nope"}, {"메일": ""}]
    assert count_valid_emails(rows, "메일") == 1
    assert count_valid_emails(rows, "") == 0


def test_row_key_uses_header_aliases():
    assert row_key({"이메일": "A@Example.com", "이름": "x"}) == row_key({"email": "a@example.com"})
    assert row_key({"이름": "Kim", "전화번호": "010-1"}) == "name:kim|phone:0101"


def test_pick_recipients_skips_existing_and_unselected():
    people = [
        Participant(id="p1", name="홍길동", email="hong@example.com"),
        Participant(id="p2", name="김철수", phone="010-0000-0000", company="Sample Co."),
        Participant(id="p3", name="이영희", email="lee@example.com"),
    ]
    existing = [{"이름": "홍", "이메일": "HONG@example.com"}]
    picked = pick_recipients(existing, people, {"p1", "p2"})
    assert picked == [{"name": "김철수", "email": "", "company": "Sample Co.", "phone": "010-0000-0000"}]
    merged = add_rows(existing, picked + picked)
    assert len(merged) == 2


def test_search_candidates():
    people = [Participant(name="홍길동", company="BTWSoft"), Participant(name="Kim", phone="010-9")]
    assert [p.name for p in search_candidates(people, "010-9")] == ["Kim"]
    assert len(search_candidates(people, "")) == 2


def test_render_message_placeholders():
    row = {"이름": "홍길동", "회사": "BTWSoft"}
    out = render_message("{{name}}님 ({{회사}}) {{ eventId }} {{unknown}}", row, "evt_1")
    assert out == "홍길동님 (BTWSoft) evt_1 {{unknown}}"


def test_sample_recipient_sheet_reads_back():
    headers, rows = read_recipient_file(sample_xlsx_bytes(RECIPIENT_FIELDS), "recipients-sample.xlsx")
    email_col = detect_email_column(headers)
    assert email_col == "이메일"
    assert count_valid_emails(rows, email_col) == 2
    assert render_message("{{name}}", rows[0], "evt_1") == "홍길동"
