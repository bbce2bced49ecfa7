# roster_core/badges.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Participant

QR_PREFIX = "EM1"

# A4 portrait, mm
PAGE_MM = (210.0, 297.0)
PAGE_MARGIN_MM = 10.0


@dataclass(frozen=True)
class BadgePreset:
    key: str
    label: str
    width_mm: float
    height_mm: float
    gap_mm: float
    radius_mm: float
    qr_mm: float


BADGE_PRESETS: Dict[str, BadgePreset] = {
    p.key: p
    for p in [
        BadgePreset("id1", "ID-1 (85.6×54mm)", 85.6, 54, 4, 3, 18),
        BadgePreset("90x60", "90×60mm", 90, 60, 4, 3, 18),
        BadgePreset("100x70", "100×70mm", 100, 70, 4, 3, 20),
        BadgePreset("a6", "A6 (105×148mm)", 105, 148, 6, 4, 24),
    ]
}


@dataclass
class BadgeOptions:
    show_company: bool = True
    show_title: bool = True
    show_qr: bool = True
    qr_label: bool = True
    cut_line: bool = True
    font_scale: float = 1.0


def stable_id(p: Participant) -> str:
    """32-bit FNV-1a over email|phone|name|company, base 36."""
    base = f"{p.email or ''}|{p.phone or ''}|{p.name or ''}|{p.company or ''}".strip()
    h = 2166136261
    units = base.encode("utf-16-le")
    for i in range(0, len(units), 2):
        h ^= units[i] | (units[i + 1] << 8)
        h = (h * 16777619) & 0xFFFFFFFF
    return f"p_{_base36(h)}"


def _base36(n: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(digits[r])
    return "".join(reversed(out))


def with_ids(participants: Iterable[Participant]) -> List[Participant]:
    return [p if p.id else p.model_copy(update={"id": stable_id(p)}) for p in participants]


def qr_payload(event_id: str, participant_id: str) -> str:
    return f"{QR_PREFIX}|{event_id}|{participant_id}"


def parse_qr_payload(text: str) -> Optional[Tuple[str, str]]:
    """(event_id, participant_id), or None when the text is not a badge code."""
    parts = (text or "").strip().split("|")
    if len(parts) != 3 or parts[0] != QR_PREFIX or not parts[1] or not parts[2]:
        return None
    return parts[1], parts[2]


def grid_shape(preset: BadgePreset) -> Tuple[int, int]:
    """(columns, rows) of badges that fit inside the printable area."""
    usable_w = PAGE_MM[0] - 2 * PAGE_MARGIN_MM
    usable_h = PAGE_MM[1] - 2 * PAGE_MARGIN_MM
    cols = int((usable_w + preset.gap_mm) // (preset.width_mm + preset.gap_mm))
    rows = int((usable_h + preset.gap_mm) // (preset.height_mm + preset.gap_mm))
    return max(1, cols), max(1, rows)


def grid_positions(preset: BadgePreset, count: int) -> List[Tuple[int, float, float]]:
    """(page, x_mm, y_mm) of each badge's top-left corner, page from 0."""
    cols, rows = grid_shape(preset)
    per_page = cols * rows
    out = []
    for i in range(count):
        page, slot = divmod(i, per_page)
        r, c = divmod(slot, cols)
        x = PAGE_MARGIN_MM + c * (preset.width_mm + preset.gap_mm)
        y = PAGE_MARGIN_MM + r * (preset.height_mm + preset.gap_mm)
        out.append((page, x, y))
    return out
