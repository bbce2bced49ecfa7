# roster_core/storage.py
from __future__ import annotations
import json
import logging
import os
import re
import tempfile
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .models import Participant

logger = logging.getLogger(__name__)

KEY_PREFIX = "event-manager:"
GLOBAL_PARTICIPANTS_KEY = f"{KEY_PREFIX}global-participants:v1"
EVENTS_KEY = f"{KEY_PREFIX}events:v1"
PARTICIPANTS_KEY_PREFIX = f"{KEY_PREFIX}participants:"
CHECKINS_KEY_PREFIX = f"{KEY_PREFIX}checkins:"


def roster_key(event_id: str) -> str:
    return f"{PARTICIPANTS_KEY_PREFIX}{event_id}"


def checkins_key(event_id: str) -> str:
    return f"{CHECKINS_KEY_PREFIX}{event_id}"


@dataclass
class StorageResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None


class JsonFileStore:
    """One JSON document per scope key under `base_dir`."""

    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def path_for(self, key: str) -> str:
        safe = re.sub(r"[^A-Za-z0-9._-]", "_", key)
        return os.path.join(self.base_dir, f"{safe}.json")

    def load(self, key: str) -> StorageResult:
        path = self.path_for(key)
        if not os.path.exists(path):
            return StorageResult(ok=True, value=None)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return StorageResult(ok=True, value=json.load(f))
        except (OSError, ValueError) as e:
            return StorageResult(ok=False, error=f"{type(e).__name__}: {e}")

    def save(self, key: str, value: Any) -> StorageResult:
        path = self.path_for(key)
        tmp = None
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.base_dir, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
            return StorageResult(ok=True, value=value)
        except (OSError, TypeError, ValueError) as e:
            if tmp and os.path.exists(tmp):
                os.remove(tmp)
            return StorageResult(ok=False, error=f"{type(e).__name__}: {e}")

    def remove(self, key: str) -> StorageResult:
        try:
            os.remove(self.path_for(key))
        except FileNotFoundError:
            pass
        except OSError as e:
            return StorageResult(ok=False, error=f"{type(e).__name__}: {e}")
        return StorageResult(ok=True)


class MemoryStore:
    """In-memory store; `fail=True` makes every call report failure."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, fail: bool = False):
        self.data: Dict[str, Any] = dict(data or {})
        self.fail = fail

    def load(self, key: str) -> StorageResult:
        if self.fail:
            return StorageResult(ok=False, error="storage unavailable")
        # round-trip through JSON so callers never share objects with the store
        raw = self.data.get(key)
        return StorageResult(ok=True, value=None if raw is None else json.loads(raw))

    def save(self, key: str, value: Any) -> StorageResult:
        if self.fail:
            return StorageResult(ok=False, error="storage unavailable")
        self.data[key] = json.dumps(value, ensure_ascii=False)
        return StorageResult(ok=True, value=value)

    def remove(self, key: str) -> StorageResult:
        if self.fail:
            return StorageResult(ok=False, error="storage unavailable")
        self.data.pop(key, None)
        return StorageResult(ok=True)


def load_list(store, key: str) -> List[Any]:
    res = store.load(key)
    if not res.ok:
        logger.warning("load %s failed: %s", key, res.error)
        return []
    if not isinstance(res.value, list):
        if res.value is not None:
            logger.warning("load %s: expected a list, got %s", key, type(res.value).__name__)
        return []
    return res.value


def coerce_participants(raw_items: Any, key: str = "") -> List[Participant]:
    """Validate stored records; anything malformed is skipped."""
    if not isinstance(raw_items, list):
        return []
    items: List[Participant] = []
    skipped = 0
    for raw in raw_items:
        if not isinstance(raw, dict):
            skipped += 1
            continue
        try:
            items.append(Participant(**raw))
        except PydanticValidationError:
            skipped += 1
    if skipped:
        logger.warning("load %s: skipped %d malformed record(s)", key, skipped)
    return items


def load_participants(store, key: str) -> List[Participant]:
    return coerce_participants(load_list(store, key), key)


def save_participants(store, key: str, items: Iterable[Participant]) -> StorageResult:
    res = store.save(key, [p.to_record() for p in items])
    if not res.ok:
        logger.warning("save %s failed: %s", key, res.error)
    return res
