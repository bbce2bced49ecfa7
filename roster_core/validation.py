# roster_core/validation.py
from __future__ import annotations
import math
import re
from typing import Any, Optional

from .errors import ValidationError
from .models import Participant

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NON_DIGIT_RE = re.compile(r"\D")


def cell_text(value: Any) -> str:
    """Spreadsheet cell -> trimmed text. None/NaN -> '', 1234.0 -> '1234'."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def only_digits(value: Optional[str]) -> str:
    return NON_DIGIT_RE.sub("", value or "")


def format_phone_kr(value: Optional[str]) -> str:
    """Progressive 000-0000-0000 formatting, at most 11 digits."""
    digits = only_digits(value)[:11]
    if len(digits) <= 3:
        return digits
    if len(digits) <= 7:
        return f"{digits[:3]}-{digits[3:]}"
    return f"{digits[:3]}-{digits[3:7]}-{digits[7:]}"


def normalize_phone_digits(value: Optional[str]) -> str:
    # comparison only; stored phones keep the typed format
    return only_digits(value)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: Optional[str]) -> bool:
    v = normalize_email(email)
    if not v:
        return False
    return bool(EMAIL_RE.match(v))


def validate_manual_entry(
    name: str,
    email: str = "",
    phone: str = "",
    company: str = "",
    role: str = "",
) -> Participant:
    n = (name or "").strip()
    if not n:
        raise ValidationError("이름은 필수입니다.")
    e = (email or "").strip()
    if e and not is_valid_email(e):
        raise ValidationError("이메일 형식이 올바르지 않습니다.")
    return Participant(name=n, email=e, phone=phone, company=company, role=role)


def run_self_test():
    """
    Run a basic suite of self-tests.
    """
    results = {"tests": []}
    from .aliases import resolve_headers
    from .dedup import dedup_key, merge_participants
    header_map = resolve_headers(["이름", " Email ", "Phone"])
    results["tests"].append(("Header aliases resolve", header_map[0] == "name" and header_map[2] == "phone"))
    a = Participant(name="A", email="x@example.com")
    b = Participant(name="B", email="X@Example.com ")
    results["tests"].append(("Email key is case-insensitive", dedup_key(a) == dedup_key(b)))
    merged = merge_participants([a], [b]).merged
    results["tests"].append(("Existing record wins", len(merged) == 1 and merged[0].name == "A"))
    results["tests"].append(("Phone formatting", format_phone_kr("01012345678") == "010-1234-5678"))
    return results
