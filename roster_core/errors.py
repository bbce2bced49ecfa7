# roster_core/errors.py
from __future__ import annotations


class RosterImportError(Exception):
    """Fatal to one import call. str(exc) is the message shown to the user."""


class UnsupportedFormat(RosterImportError):
    def __init__(self, message: str = "지원하지 않는 형식입니다. .xlsx / .csv 파일만 업로드해주세요."):
        super().__init__(message)


class FileTooLarge(RosterImportError):
    def __init__(self, limit_bytes: int):
        self.limit_bytes = limit_bytes
        mb = limit_bytes / (1024 * 1024)
        super().__init__(f"파일은 {mb:g}MB 이하만 업로드 가능합니다.")


class EmptySheet(RosterImportError):
    def __init__(self, message: str = "엑셀에 데이터가 없습니다."):
        super().__init__(message)


class NoSheetFound(RosterImportError):
    def __init__(self, message: str = "엑셀 시트를 찾지 못했습니다."):
        super().__init__(message)


class UnreadableSheet(RosterImportError):
    def __init__(self, message: str = "엑셀 시트를 읽지 못했습니다."):
        super().__init__(message)


class MissingRequiredColumn(RosterImportError):
    def __init__(self, header: str = "이름"):
        self.header = header
        super().__init__(
            f"헤더(첫 줄)에 '{header}' 컬럼이 필요합니다. 샘플 엑셀을 다운로드해서 형식을 맞춰주세요."
        )


class ValidationError(ValueError):
    """Manual entry rejected (missing name, malformed email)."""


class DuplicateParticipant(ValidationError):
    def __init__(self, message: str = "이미 등록된 참가자입니다. (이메일 또는 이름 + 전화 기준)"):
        super().__init__(message)


class EventValidationError(ValueError):
    pass
