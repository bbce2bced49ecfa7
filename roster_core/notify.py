# roster_core/notify.py
from __future__ import annotations
import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .aliases import HEADER_ALIASES, sanitize_header
from .dedup import dedup_key
from .io import read_rows
from .models import Participant
from .validation import cell_text, is_valid_email

logger = logging.getLogger(__name__)

Row = Dict[str, str]

EMAIL_HEADER_CANDIDATES = ["email", "e-mail", "메일", "이메일"]
MAX_PREVIEW_ROWS = 10
# picker rows and the sample recipient sheet
RECIPIENT_FIELDS = ["name", "email", "company", "phone"]
PLACEHOLDER_RE = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")

DEFAULT_SUBJECT = "[Event] 행사 안내"
DEFAULT_BODY = "안녕하세요, {{name}}님.\n\n행사에 초대드립니다.\n- 행사 ID: {{eventId}}\n\n감사합니다."


def read_recipient_file(data: bytes, filename: str, max_bytes: Optional[int] = None) -> Tuple[List[str], List[Row]]:
    """Headers as written plus one dict per non-blank data row."""
    raw = read_rows(data, filename, max_bytes=max_bytes)
    headers = [cell_text(h) or f"column{i + 1}" for i, h in enumerate(raw[0])]
    rows: List[Row] = []
    for r in raw[1:]:
        values = [cell_text(r[i]) if i < len(r) else "" for i in range(len(headers))]
        if not any(values):
            continue
        rows.append(dict(zip(headers, values)))
    logger.info("recipient file %s: %d row(s)", filename, len(rows))
    return headers, rows


def detect_email_column(headers: Sequence[str]) -> str:
    for h in headers:
        if h.strip().lower() in EMAIL_HEADER_CANDIDATES:
            return h
    return ""


def count_valid_emails(rows: Iterable[Row], column: str) -> int:
    if not column:
        return 0
    return sum(1 for r in rows if is_valid_email(r.get(column, "")))


def _as_record(row: Row) -> Row:
    # header text -> internal field, so 이메일/email columns key alike
    rec: Row = {}
    for k, v in row.items():
        field = HEADER_ALIASES.get(k) or HEADER_ALIASES.get(sanitize_header(k))
        if field and field not in rec:
            rec[field] = v
    return rec


def row_key(row: Row) -> str:
    return dedup_key(_as_record(row))


def search_candidates(people: Iterable[Participant], query: str) -> List[Participant]:
    k = (query or "").strip().lower()
    people = [p for p in people if p.name.strip()]
    if not k:
        return people
    return [
        p for p in people
        if k in f"{p.name} {p.email or ''} {p.company or ''} {p.phone or ''}".lower()
    ]


def pick_recipients(existing: List[Row], candidates: Iterable[Participant], selected_ids: Set[str]) -> List[Row]:
    """Rows for the selected people that are not already in `existing`."""
    picked = [p for p in candidates if p.id in selected_ids]
    seen = {row_key(r) for r in existing}
    to_add: List[Row] = []
    for p in picked:
        row = {f: getattr(p, f) or "" for f in RECIPIENT_FIELDS}
        key = row_key(row)
        if key in seen:
            continue
        seen.add(key)
        to_add.append(row)
    return to_add


def add_rows(existing: List[Row], new_rows: Iterable[Row]) -> List[Row]:
    merged = list(existing)
    seen = {row_key(r) for r in existing}
    for r in new_rows:
        key = row_key(r)
        if key in seen:
            continue
        seen.add(key)
        merged.append(r)
    return merged


def render_message(template: str, row: Row, event_id: str) -> str:
    values = dict(row)
    values.setdefault("eventId", event_id)
    rec = _as_record(row)
    if "name" in rec:
        values.setdefault("name", rec["name"])

    def sub(m):
        key = m.group(1)
        return values[key] if key in values else m.group(0)

    return PLACEHOLDER_RE.sub(sub, template)
