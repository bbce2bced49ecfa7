# roster_core/api.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

import requests

from .models import Participant

logger = logging.getLogger(__name__)


@dataclass
class ApiResult:
    ok: bool
    data: Any = None
    status: Optional[int] = None
    message: str = ""


def post_json(
    url: str,
    body: Any,
    session: Optional[requests.Session] = None,
    timeout: float = 5.0,
) -> ApiResult:
    """POST a JSON body. Never raises; failures come back as ok=False."""
    http = session or requests
    try:
        res = http.post(url, json=body, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("POST %s failed: %s", url, e)
        return ApiResult(ok=False, message=str(e) or "Network error")

    payload = None
    if res.text:
        try:
            payload = res.json()
        except ValueError:
            payload = None
            if res.ok:
                return ApiResult(ok=False, status=res.status_code, message="Invalid JSON response")

    if not res.ok:
        message = f"Request failed ({res.status_code})"
        if isinstance(payload, dict) and payload.get("message"):
            message = str(payload["message"])
        logger.warning("POST %s -> %s: %s", url, res.status_code, message)
        return ApiResult(ok=False, status=res.status_code, message=message)

    return ApiResult(ok=True, data=payload, status=res.status_code)


Poster = Callable[..., ApiResult]


def register_bulk(
    rows: Iterable[Participant],
    endpoint: str,
    poster: Poster = post_json,
    timeout: float = 5.0,
) -> ApiResult:
    """Send `{"items": [...]}` to the bulk registration endpoint."""
    if not endpoint:
        return ApiResult(ok=False, message="endpoint not configured")
    items = [p.to_record() for p in rows]
    result = poster(endpoint, {"items": items}, timeout=timeout)
    if result.ok and not isinstance(result.data, dict):
        return ApiResult(ok=False, status=result.status, message="Unexpected response body")
    return result
