# roster_core/checkin.py
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from .badges import parse_qr_payload, stable_id
from .models import Participant
from .storage import checkins_key

logger = logging.getLogger(__name__)

CheckIns = Dict[str, Dict[str, str]]


class CheckInError(ValueError):
    pass


def load_checkins(store, event_id: str) -> CheckIns:
    res = store.load(checkins_key(event_id))
    if not res.ok:
        logger.warning("load check-ins for %s failed: %s", event_id, res.error)
        return {}
    return res.value if isinstance(res.value, dict) else {}


def _save(store, event_id: str, records: CheckIns) -> bool:
    res = store.save(checkins_key(event_id), records)
    if not res.ok:
        logger.warning("save check-ins for %s failed: %s", event_id, res.error)
    return res.ok


def check_in(store, event_id: str, qr_text: str, now: Optional[datetime] = None) -> str:
    """Record a scanned badge; returns the participant id."""
    parsed = parse_qr_payload(qr_text)
    if parsed is None:
        raise CheckInError("명찰 QR 코드가 아닙니다.")
    scanned_event, pid = parsed
    if scanned_event != event_id:
        raise CheckInError(f"다른 행사의 QR 코드입니다. ({scanned_event})")

    records = load_checkins(store, event_id)
    records[pid] = {"at": (now or datetime.now(timezone.utc)).isoformat()}
    _save(store, event_id, records)
    logger.info("checked in %s at %s", pid, event_id)
    return pid


def mark_all_checked_in(store, event_id: str, participants: Iterable[Participant], now: Optional[datetime] = None) -> CheckIns:
    """Check in everyone not already checked in; earlier scans keep their time."""
    at = (now or datetime.now(timezone.utc)).isoformat()
    records = load_checkins(store, event_id)
    for p in participants:
        records.setdefault(p.id or stable_id(p), {"at": at})
    _save(store, event_id, records)
    return records
