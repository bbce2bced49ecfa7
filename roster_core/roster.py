# roster_core/roster.py
from __future__ import annotations
import logging
from typing import Iterable, List, Tuple

from .dedup import merge_participants
from .models import MergeResult, Participant
from .storage import load_participants, roster_key, save_participants

logger = logging.getLogger(__name__)


def load_roster(store, event_id: str) -> List[Participant]:
    return load_participants(store, roster_key(event_id))


def save_roster(store, event_id: str, items: Iterable[Participant]) -> bool:
    return save_participants(store, roster_key(event_id), items).ok


def add_to_roster(store, event_id: str, incoming: Iterable[Participant]) -> Tuple[MergeResult, bool]:
    """Merge into the stored roster; returns the merge and whether it was saved."""
    result = merge_participants(load_roster(store, event_id), incoming)
    return result, save_roster(store, event_id, result.merged)


def reset_roster(store, event_id: str) -> bool:
    res = store.remove(roster_key(event_id))
    if not res.ok:
        logger.warning("reset roster %s failed: %s", event_id, res.error)
    return res.ok


def preview(items: List[Participant], limit: int) -> Tuple[List[Participant], int]:
    """First `limit` rows and how many were left out."""
    return items[:limit], max(0, len(items) - limit)
