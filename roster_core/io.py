# roster_core/io.py
from __future__ import annotations
import csv
import io
import logging
import os
from typing import Any, Iterable, List, Optional, Sequence

import pandas as pd

from .aliases import mapping_report, resolve_headers
from .errors import (
    EmptySheet,
    FileTooLarge,
    NoSheetFound,
    UnreadableSheet,
    UnsupportedFormat,
)
from .models import ALL_FIELDS, ImportResult, Participant
from .validation import cell_text

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = ("xlsx", "xls", "csv")
EXCEL_ENGINES = {"xlsx": "openpyxl", "xls": "xlrd"}
SHEET_NAME = "participants"

# Export/template header labels, in internal field order
TEMPLATE_HEADERS = {
    "name": "이름",
    "email": "이메일",
    "phone": "전화번호",
    "company": "회사",
    "role": "직함/역할",
    "note": "비고",
}

SAMPLE_ROWS = [
    {
        "name": "홍길동",
        "email": "hong@example.com",
        "phone": "010-1234-5678",
        "company": "BTWSoft",
        "role": "매니저",
        "note": "샘플 데이터",
    },
    {
        "name": "김철수",
        "email": "kim@example.com",
        "phone": "010-0000-0000",
        "company": "Sample Co.",
        "role": "참가자",
    },
]


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lstrip(".").lower()


def check_extension(filename: str) -> str:
    ext = file_extension(filename)
    if ext not in ACCEPTED_EXTENSIONS:
        raise UnsupportedFormat()
    return ext


def _decode_text(data: bytes) -> str:
    for encoding in ("utf-8-sig", "cp949"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise UnreadableSheet("파일을 읽는 중 오류가 발생했습니다.")


def _read_csv(data: bytes) -> pd.DataFrame:
    text = _decode_text(data)
    if not text.strip():
        raise EmptySheet()
    try:
        # rows may be wider than the header; size the frame to the widest one
        width = max((len(r) for r in csv.reader(io.StringIO(text))), default=0)
        return pd.read_csv(
            io.StringIO(text),
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError as e:
        raise EmptySheet() from e
    except (pd.errors.ParserError, csv.Error) as e:
        raise UnreadableSheet("CSV 파일을 해석하지 못했습니다.") from e


def _read_first_sheet(data: bytes, ext: str) -> pd.DataFrame:
    try:
        book = pd.ExcelFile(io.BytesIO(data), engine=EXCEL_ENGINES[ext])
    except Exception as e:
        logger.warning("workbook could not be opened: %s", e)
        raise UnreadableSheet("파일을 읽는 중 오류가 발생했습니다.") from e
    if not book.sheet_names:
        raise NoSheetFound()
    try:
        return book.parse(book.sheet_names[0], header=None)
    except Exception as e:
        logger.warning("sheet %r could not be decoded: %s", book.sheet_names[0], e)
        raise UnreadableSheet() from e


def read_rows(data: bytes, filename: str, max_bytes: Optional[int] = None) -> List[List[Any]]:
    """
    Read the first sheet (or the CSV) as raw rows, header row first.
    Interior blank rows keep their position; trailing blank rows are dropped.
    """
    ext = check_extension(filename)
    if max_bytes is not None and len(data) > max_bytes:
        raise FileTooLarge(max_bytes)

    df = _read_csv(data) if ext == "csv" else _read_first_sheet(data, ext)
    rows = [list(r) for r in df.itertuples(index=False, name=None)]
    while rows and all(cell_text(c) == "" for c in rows[-1]):
        rows.pop()
    if not rows:
        raise EmptySheet()
    return rows


def parse_rows(rows: Sequence[Sequence[Any]], header_map: List[Optional[str]]) -> ImportResult:
    """
    Turn data rows into participants. Rows without a name are skipped with a
    warning numbered from 1 at the header row.
    """
    accepted: List[Participant] = []
    warnings: List[str] = []
    for i in range(1, len(rows)):
        row = rows[i] or []
        record = {}
        for idx, field in enumerate(header_map):
            if not field:
                continue
            text = cell_text(row[idx]) if idx < len(row) else ""
            if text:
                record[field] = text
        if not record.get("name"):
            warnings.append(f"{i + 1}행: 이름이 비어 있어 제외했습니다.")
            continue
        accepted.append(Participant(**record))

    if warnings:
        logger.warning("%d row(s) rejected for missing name", len(warnings))
    return ImportResult(rows=accepted, warnings=warnings, header_map=header_map)


def parse_file(
    data: bytes,
    filename: str,
    fields: List[str] = ALL_FIELDS,
    max_bytes: Optional[int] = None,
) -> ImportResult:
    rows = read_rows(data, filename, max_bytes=max_bytes)
    header_map = resolve_headers(rows[0], fields)
    result = parse_rows(rows, header_map)
    result.mapping = mapping_report(rows[0], header_map)
    logger.info(
        "parsed %s: %d accepted, %d rejected",
        filename, len(result.rows), len(result.warnings),
    )
    return result


def participants_to_dataframe(participants: Iterable[Any], fields: List[str] = ALL_FIELDS) -> pd.DataFrame:
    records = []
    for p in participants:
        rec = p.to_record() if isinstance(p, Participant) else dict(p)
        records.append([rec.get(f) or "" for f in fields])
    return pd.DataFrame(records, columns=[TEMPLATE_HEADERS[f] for f in fields])


def export_xlsx_bytes(participants: Iterable[Any], fields: List[str] = ALL_FIELDS) -> bytes:
    df = participants_to_dataframe(participants, fields)
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
    return buf.getvalue()


def export_csv_bytes(participants: Iterable[Any], fields: List[str] = ALL_FIELDS) -> bytes:
    df = participants_to_dataframe(participants, fields)
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    # BOM so spreadsheet apps pick up UTF-8
    return buf.getvalue().encode("utf-8-sig")


def sample_xlsx_bytes(fields: List[str] = ALL_FIELDS) -> bytes:
    return export_xlsx_bytes(SAMPLE_ROWS, fields)


def sample_csv_bytes(fields: List[str] = ALL_FIELDS) -> bytes:
    return export_csv_bytes(SAMPLE_ROWS, fields)
