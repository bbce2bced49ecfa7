# roster_core/participants.py
from __future__ import annotations
import logging
import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .dedup import find_duplicate
from .errors import DuplicateParticipant
from .models import Participant
from .storage import (
    GLOBAL_PARTICIPANTS_KEY,
    coerce_participants,
    load_participants,
    save_participants,
)
from .validation import validate_manual_entry

logger = logging.getLogger(__name__)

MOCK_PEOPLE = [
    # (name, email, phone, company, role, hours ago)
    ("홍길동", "hong@example.com", "010-1234-5678", "BTWSoft", "매니저", 1),
    ("김철수", "kim@example.com", "010-0000-0000", "Sample Co.", "참가자", 5),
    ("이영희", "lee@example.com", "010-2222-3333", "Alpha Lab", "운영", 12),
    ("박민수", "park@example.com", "010-9999-1111", "Beta Inc.", "게스트", 24),
    ("최지우", "choi@example.com", "010-4444-5555", "Gamma Studio", "스태프", 40),
]


def new_participant_id() -> str:
    return f"p_{int(time.time() * 1000)}_{secrets.token_hex(6)}"


def now_iso(now: Optional[datetime] = None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def make_mock_participants(now: Optional[datetime] = None) -> List[Participant]:
    now = now or datetime.now(timezone.utc)
    return [
        Participant(
            id=new_participant_id(),
            name=name, email=email, phone=phone, company=company, role=role,
            created_at=now_iso(now - timedelta(hours=hours)),
        )
        for name, email, phone, company, role, hours in MOCK_PEOPLE
    ]


def load_global(store) -> List[Participant]:
    """Stored list, seeded with example records the first time."""
    res = store.load(GLOBAL_PARTICIPANTS_KEY)
    if res.ok and isinstance(res.value, list):
        return coerce_participants(res.value, GLOBAL_PARTICIPANTS_KEY)
    mocks = make_mock_participants()
    if not res.ok:
        # show the examples without persisting them
        logger.warning("global participants unavailable: %s", res.error)
        return mocks
    save_participants(store, GLOBAL_PARTICIPANTS_KEY, mocks)
    logger.info("seeded %d example participants", len(mocks))
    return mocks


def register(
    store,
    name: str,
    email: str = "",
    phone: str = "",
    company: str = "",
    role: str = "",
    now: Optional[datetime] = None,
) -> Participant:
    candidate = validate_manual_entry(name, email, phone, company, role)
    items = load_participants(store, GLOBAL_PARTICIPANTS_KEY)
    if find_duplicate(items, candidate) is not None:
        raise DuplicateParticipant()
    person = candidate.model_copy(update={"id": new_participant_id(), "created_at": now_iso(now)})
    save_participants(store, GLOBAL_PARTICIPANTS_KEY, [person] + items)
    return person


def delete(store, pid: str) -> List[Participant]:
    items = [p for p in load_participants(store, GLOBAL_PARTICIPANTS_KEY) if p.id != pid]
    save_participants(store, GLOBAL_PARTICIPANTS_KEY, items)
    return items


def reset(store) -> bool:
    # an empty list, not a missing key, so the examples are not seeded again
    return save_participants(store, GLOBAL_PARTICIPANTS_KEY, []).ok


def inject_mocks(store) -> List[Participant]:
    mocks = make_mock_participants()
    save_participants(store, GLOBAL_PARTICIPANTS_KEY, mocks)
    return mocks


def search(items: List[Participant], query: str) -> List[Participant]:
    keyword = (query or "").strip().lower()
    if not keyword:
        return list(items)
    out = []
    for p in items:
        hay = " ".join([p.name, p.email or "", p.phone or "", p.company or "", p.role or ""]).lower()
        if keyword in hay:
            out.append(p)
    return out
