# roster_core/models.py
from __future__ import annotations
from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

# Internal field order; also the export column order.
ALL_FIELDS = ["name", "email", "phone", "company", "role", "note"]
GLOBAL_FIELDS = ["name", "email", "phone", "company", "role"]


class Participant(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    note: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, v):
        text = "" if v is None else str(v).strip()
        if not text:
            raise ValueError("name must not be empty")
        return text

    @field_validator("email", "phone", "company", "role", "note", "id", "created_at", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    def to_record(self) -> Dict[str, str]:
        return self.model_dump(exclude_none=True)


class ImportResult(BaseModel):
    rows: List[Participant] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    header_map: List[Optional[str]] = Field(default_factory=list)
    mapping: str = ""


class MergeResult(BaseModel):
    merged: List[Participant] = Field(default_factory=list)
    added: List[Participant] = Field(default_factory=list)


class ImportOutcome(BaseModel):
    merged: List[Participant] = Field(default_factory=list)
    added: List[Participant] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    parsed_count: int = 0
    saved: bool = False
    remote_ok: bool = False
    remote_message: str = ""
    message: str = ""
    mapping: str = ""


class EventItem(BaseModel):
    id: str
    name: str
    start_at: datetime
    end_at: datetime
    location: Optional[str] = None


class AppConfig(BaseModel):
    data_dir: str = "data"
    bulk_endpoint: str = ""
    request_timeout: float = 5.0
    max_upload_bytes: int = 2 * 1024 * 1024
    preview_rows: int = 500
    warning_preview: int = 10
    log_level: str = "INFO"
    default_badge_preset: str = "id1"

    @field_validator("request_timeout", "max_upload_bytes", "preview_rows", "warning_preview")
    @classmethod
    def _positive(cls, v):
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def _level(cls, v):
        v = str(v).upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v
