# roster_core/events.py
from __future__ import annotations
import logging
import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import EventValidationError
from .models import EventItem
from .storage import EVENTS_KEY

logger = logging.getLogger(__name__)

KST = timezone(timedelta(hours=9), name="KST")

STATUS_LABELS = {
    "UPCOMING": "예정",
    "ONGOING": "진행중",
    "ENDED": "종료",
}


def make_event_id() -> str:
    return f"evt_{int(time.time() * 1000)}_{secrets.token_hex(6)}"


def _utc(dt: datetime) -> datetime:
    # naive datetimes are taken as KST, the console's local time
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=KST)
    return dt.astimezone(timezone.utc)


def make_default_events(now: Optional[datetime] = None) -> List[EventItem]:
    now = _utc(now or datetime.now(timezone.utc))
    return [
        EventItem(
            id="sample-event-001",
            name="Sample Event 001",
            start_at=now - timedelta(minutes=30),
            end_at=now + timedelta(minutes=90),
            location="서울 (샘플)",
        )
    ]


def _save(store, events: List[EventItem]) -> bool:
    res = store.save(EVENTS_KEY, [e.model_dump(mode="json", exclude_none=True) for e in events])
    if not res.ok:
        logger.warning("save events failed: %s", res.error)
    return res.ok


def load_events(store, seed: bool = True) -> List[EventItem]:
    res = store.load(EVENTS_KEY)
    if res.ok and isinstance(res.value, list):
        events = []
        for raw in res.value:
            try:
                events.append(EventItem(**raw))
            except (PydanticValidationError, TypeError):
                logger.warning("skipping malformed event record")
        return events
    if not seed:
        return []
    events = make_default_events()
    if res.ok:
        _save(store, events)
    return events


def create_event(
    store,
    name: str,
    start: datetime,
    end: datetime,
    location: str = "",
) -> EventItem:
    n = (name or "").strip()
    if not n or start is None or end is None:
        raise EventValidationError("필수값(행사명/시작/종료)을 확인해주세요.")
    start_at, end_at = _utc(start), _utc(end)
    if end_at <= start_at:
        raise EventValidationError("종료 시간이 시작 시간보다 늦어야 합니다.")

    item = EventItem(
        id=make_event_id(),
        name=n,
        start_at=start_at,
        end_at=end_at,
        location=(location or "").strip() or None,
    )
    events = load_events(store, seed=False)
    if not _save(store, [item] + events):
        raise EventValidationError("저장에 실패했습니다. (저장소 접근 불가)")
    return item


def get_event(store, event_id: str) -> Optional[EventItem]:
    for ev in load_events(store, seed=False):
        if ev.id == event_id:
            return ev
    return None


def event_status(ev: EventItem, now: Optional[datetime] = None) -> str:
    now = _utc(now or datetime.now(timezone.utc))
    if now < _utc(ev.start_at):
        return "UPCOMING"
    if now <= _utc(ev.end_at):
        return "ONGOING"
    return "ENDED"


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def format_kst(dt: datetime) -> str:
    return _utc(dt).astimezone(KST).strftime("%Y.%m.%d %H:%M")
