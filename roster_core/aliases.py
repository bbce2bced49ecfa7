# FILE: roster_core/aliases.py
import re
from typing import Any, Dict, Iterable, List, Optional

from .errors import MissingRequiredColumn
from .models import ALL_FIELDS
from .validation import cell_text

ALIASES = {
    "name": ["이름", "name"],
    "email": ["이메일", "email"],
    "phone": ["전화번호", "휴대폰", "phone"],
    "company": ["회사", "소속", "company"],
    "role": ["직함", "역할", "직함/역할", "role", "title"],
    "note": ["비고", "메모", "note"],
}

# header text -> field, keyed both as written and sanitized
HEADER_ALIASES: Dict[str, str] = {}
for _field, _aliases in ALIASES.items():
    for _alias in _aliases:
        HEADER_ALIASES[_alias] = _field
        HEADER_ALIASES[re.sub(r"\s+", "", _alias).lower()] = _field

REQUIRED_HEADER = ALIASES["name"][0]


def sanitize_header(h: Any) -> str:
    return re.sub(r"\s+", "", cell_text(h)).lower()


def resolve_headers(cells: Iterable[Any], fields: List[str] = ALL_FIELDS) -> List[Optional[str]]:
    """
    Map each header cell to an internal field (or None) by position.
    Raises MissingRequiredColumn when nothing maps to `name`.
    """
    allowed = set(fields)
    header_map: List[Optional[str]] = []
    for cell in cells:
        raw = cell_text(cell)
        field = HEADER_ALIASES.get(raw) or HEADER_ALIASES.get(sanitize_header(cell))
        header_map.append(field if field in allowed else None)
    if "name" not in header_map:
        raise MissingRequiredColumn(REQUIRED_HEADER)
    return header_map


def mapping_report(cells: Iterable[Any], header_map: List[Optional[str]]) -> str:
    return ", ".join(f"{cell_text(c)}→{f}" for c, f in zip(cells, header_map) if f)
