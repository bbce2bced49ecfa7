"""
Small, UI-agnostic helpers shared by app.py and pages/.
"""
from __future__ import annotations
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from .events import event_status, format_kst, status_label
from .models import EventItem, Participant


def by_id(items: List[Participant]) -> Dict[str, Participant]:
    return {p.id: p for p in items if p.id}


def display_name(p: Participant) -> str:
    return f"{p.name} ({p.company})" if p.company else p.name


def warning_digest(warnings: List[str], limit: int) -> Tuple[List[str], str]:
    """First `limit` warnings and a '… 외 N건' tail when some were cut."""
    shown = warnings[:limit]
    rest = len(warnings) - len(shown)
    return shown, (f"… 외 {rest}건" if rest > 0 else "")


def event_choices(events: List[EventItem], now: Optional[datetime] = None) -> Dict[str, str]:
    """Select-box label -> event id."""
    out = {}
    for ev in events:
        label = status_label(event_status(ev, now))
        out[f"{ev.name} · {format_kst(ev.start_at)} · {label}"] = ev.id
    return out
