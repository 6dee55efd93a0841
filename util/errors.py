# util/errors.py
from typing import List, Optional
from util.enums import ErrorMessage


class ProgressError(Exception):
    """
    Base for every error the progress layer raises on purpose.

    - `info` maps the error onto a readable message and an HTTP status.
    - `key` / `value` are filled in when the error belongs to one reported
      `key=value` pair, so callers can tell which pair failed.
    """

    info: ErrorMessage = ErrorMessage.INTERNAL_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail
        self.key: Optional[str] = None
        self.value: Optional[str] = None

    def for_pair(self, key: str, value: str) -> "ProgressError":
        self.key = key
        self.value = value
        return self

    def __str__(self) -> str:
        if self.key is None:
            return self.detail
        return f"{self.key}={self.value}: {self.detail}"


class InvalidCharset(ProgressError):
    info = ErrorMessage.INVALID_CHARSET

    def __init__(self, segment: str, what: str = "segment") -> None:
        super().__init__(f"{what} must be [A-Za-z0-9_.-], got {segment!r}")
        self.segment = segment


class InvalidField(ProgressError):
    info = ErrorMessage.INVALID_FIELD

    def __init__(self, field: str) -> None:
        super().__init__(f"field name may not contain ':', got {field!r}")
        self.field = field


class DecodeError(ProgressError):
    info = ErrorMessage.BAD_STRUCTURE


class BadStructure(DecodeError):
    def __init__(self, raw: str) -> None:
        super().__init__(f"bad key structure: {raw!r}")
        self.raw = raw


class InvalidNumber(ProgressError):
    info = ErrorMessage.INVALID_NUMBER

    def __init__(self, field: str, text: str) -> None:
        super().__init__(f"{field} must be an integer or 'null', got {text!r}")
        self.field = field
        self.text = text


class StoreUnavailable(ProgressError):
    info = ErrorMessage.STORE_UNAVAILABLE


StoreError = StoreUnavailable


class ReportRejected(ProgressError):
    # Flow: one request, many pairs; each failure stays addressable on its own.
    info = ErrorMessage.REPORT_REJECTED

    def __init__(self, failures: List[ProgressError]) -> None:
        super().__init__(f"{len(failures)} update(s) rejected")
        self.failures = failures

    def lines(self) -> List[str]:
        return [str(f) for f in self.failures]
