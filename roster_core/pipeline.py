# roster_core/pipeline.py
"""
Import pipeline: read file -> resolve headers -> parse rows -> merge -> save.

Fatal problems (format, sheet, missing name column) raise RosterImportError
subclasses before anything is merged. Row rejections come back as warnings.
Storage failures are logged and reported through `ImportOutcome.saved`.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional

from .api import ApiResult, Poster, post_json, register_bulk
from .dedup import merge_participants
from .io import parse_file
from .models import ALL_FIELDS, GLOBAL_FIELDS, AppConfig, ImportOutcome, Participant
from .participants import new_participant_id, now_iso
from .roster import add_to_roster
from .storage import (
    GLOBAL_PARTICIPANTS_KEY,
    load_participants,
    save_participants,
)

logger = logging.getLogger(__name__)

NO_VALID_ROWS = "업로드할 유효한 데이터가 없습니다."


def _summary(added: int, total: int, warnings: List[str]) -> str:
    msg = f"업로드 완료: {added:,}명 추가 (현재 {total:,}명)."
    if warnings:
        msg += f" (주의 {len(warnings)}건)"
    return msg


def import_roster(
    store,
    event_id: str,
    data: bytes,
    filename: str,
    config: Optional[AppConfig] = None,
) -> ImportOutcome:
    config = config or AppConfig()
    result = parse_file(data, filename, ALL_FIELDS, max_bytes=config.max_upload_bytes)

    merge, saved = add_to_roster(store, event_id, result.rows)

    logger.info(
        "roster %s: %d parsed, %d added, %d total",
        event_id, len(result.rows), len(merge.added), len(merge.merged),
    )
    return ImportOutcome(
        merged=merge.merged,
        added=merge.added,
        warnings=result.warnings,
        parsed_count=len(result.rows),
        saved=saved,
        mapping=result.mapping,
        message=_summary(len(merge.added), len(merge.merged), result.warnings),
    )


def attempt_remote(rows: List[Participant], config: AppConfig, poster: Poster = post_json) -> ApiResult:
    return register_bulk(rows, config.bulk_endpoint, poster=poster, timeout=config.request_timeout)


def merge_local(store, rows: List[Participant], now: Optional[datetime] = None):
    created = now_iso(now)
    stamped = [p.model_copy(update={"id": new_participant_id(), "created_at": created}) for p in rows]
    existing = load_participants(store, GLOBAL_PARTICIPANTS_KEY)
    merge = merge_participants(existing, stamped)
    saved = save_participants(store, GLOBAL_PARTICIPANTS_KEY, merge.merged).ok
    return merge, saved


def import_global(
    store,
    data: bytes,
    filename: str,
    config: Optional[AppConfig] = None,
    poster: Poster = post_json,
    now: Optional[datetime] = None,
) -> ImportOutcome:
    config = config or AppConfig()
    result = parse_file(data, filename, GLOBAL_FIELDS, max_bytes=config.max_upload_bytes)

    if not result.rows:
        return ImportOutcome(
            merged=load_participants(store, GLOBAL_PARTICIPANTS_KEY),
            warnings=result.warnings,
            message=NO_VALID_ROWS,
        )

    remote = attempt_remote(result.rows, config, poster)
    if remote.ok:
        inserted = remote.data.get("inserted", len(result.rows))
        return ImportOutcome(
            merged=load_participants(store, GLOBAL_PARTICIPANTS_KEY),
            warnings=result.warnings,
            parsed_count=len(result.rows),
            remote_ok=True,
            mapping=result.mapping,
            message=f"API 등록 완료: {inserted}명",
        )

    status = remote.status if remote.status is not None else ""
    remote_message = f"API 미연결(status: {status}) → 로컬 저장소에 저장했습니다. ({remote.message})"
    logger.warning("bulk registration failed, saving locally: %s", remote.message)

    merge, saved = merge_local(store, result.rows, now)
    return ImportOutcome(
        merged=merge.merged,
        added=merge.added,
        warnings=result.warnings,
        parsed_count=len(result.rows),
        saved=saved,
        remote_message=remote_message,
        mapping=result.mapping,
        message=_summary(len(merge.added), len(merge.merged), result.warnings),
    )
