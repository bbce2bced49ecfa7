# roster_core/dedup.py
from __future__ import annotations
import logging
from typing import Iterable, List, Mapping, Set, Union

from .models import MergeResult, Participant
from .validation import normalize_email, normalize_phone_digits

logger = logging.getLogger(__name__)

Record = Union[Participant, Mapping[str, str]]


def _get(record: Record, field: str) -> str:
    if isinstance(record, Participant):
        value = getattr(record, field, None)
    else:
        value = record.get(field)
    return "" if value is None else str(value)


def dedup_key(record: Record) -> str:
    """email if present, else name (case-insensitive) + phone digits."""
    email = normalize_email(_get(record, "email"))
    if email:
        return f"email:{email}"
    name = _get(record, "name").strip().lower()
    phone = normalize_phone_digits(_get(record, "phone"))
    return f"name:{name}|phone:{phone}"


def merge_participants(existing: Iterable[Participant], incoming: Iterable[Participant]) -> MergeResult:
    """
    Existing records first, then incoming; the first record per key is kept.
    Kept records are never modified. `added` holds the incoming records kept.
    """
    seen: Set[str] = set()
    merged: List[Participant] = []
    for p in existing:
        key = dedup_key(p)
        if key in seen:
            continue
        seen.add(key)
        merged.append(p)

    added: List[Participant] = []
    dropped = 0
    for p in incoming:
        key = dedup_key(p)
        if key in seen:
            dropped += 1
            continue
        seen.add(key)
        merged.append(p)
        added.append(p)

    if dropped:
        logger.info("merge suppressed %d duplicate record(s)", dropped)
    return MergeResult(merged=merged, added=added)


def find_duplicate(items: Iterable[Participant], candidate: Record):
    key = dedup_key(candidate)
    for p in items:
        if dedup_key(p) == key:
            return p
    return None
