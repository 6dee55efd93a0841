# core/update_parser.py
"""
Grammar for one reported value (the part after `task=`):

    value   := [ label "!" ] body
    body    := [ current ] [ "/" maxpart ]
    maxpart := "null" | integer
    current := "" | "null" | integer

Examples:
    "10/100"      -> current=10, max=100, label untouched
    "done!5/null" -> label="done", current=5, max deleted
    "/50"         -> current untouched, max=50
    "null"        -> current deleted

An empty `current` leaves the field alone, while an empty max after "/" is
rejected. Existing clients depend on both rules.
"""
import re
from typing import Final, Iterable, List, Tuple
from core.identifiers import validate, validate_task
from model.progress import ABSENT, DELETE, Change, Identifier, Update, set_to
from util.errors import InvalidNumber, ProgressError, ReportRejected

LABEL_SEP: Final[str] = "!"
MAX_SEP: Final[str] = "/"
NULL: Final[str] = "null"

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

# Signed decimal only: no whitespace, underscores or other bases.
_INT_RE: Final = re.compile(r"[+-]?[0-9]+")


def parse_int64(text: str, field: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise InvalidNumber(field, text)
    n = int(text)
    if n < INT64_MIN or n > INT64_MAX:
        raise InvalidNumber(field, text)
    return n


def _parse_current(text: str) -> Change:
    if text == "":
        return ABSENT
    if text.lower() == NULL:
        return DELETE
    return set_to(parse_int64(text, "current"))


def _parse_max(text: str) -> Change:
    if text.lower() == NULL:
        return DELETE
    return set_to(parse_int64(text, "max"))


def parse_update(namespace: str, raw_key: str, raw_value: str) -> Update:
    """
    Parse one `raw_key=raw_value` pair into an Update for `namespace`.

    Any ProgressError raised here carries the pair (err.key / err.value).
    """
    try:
        identifier = Identifier(
            namespace=validate(namespace, "namespace"),
            task=validate_task(raw_key),
        )

        label: Change = ABSENT
        body = raw_value
        if LABEL_SEP in raw_value:
            text, body = raw_value.split(LABEL_SEP, 1)
            label = set_to(validate(text, "label"))

        max_: Change = ABSENT
        if MAX_SEP in body:
            current_text, max_text = body.split(MAX_SEP, 1)
            max_ = _parse_max(max_text)
        else:
            current_text = body

        return Update(
            identifier=identifier,
            label=label,
            current=_parse_current(current_text),
            max=max_,
        )
    except ProgressError as e:
        e.for_pair(raw_key, raw_value)
        raise


def parse_updates(namespace: str, pairs: Iterable[Tuple[str, str]]) -> List[Update]:
    """
    Parse every pair before anything is written. Failures are collected per
    pair and raised together as ReportRejected.
    """
    updates: List[Update] = []
    failures: List[ProgressError] = []
    for key, value in pairs:
        try:
            updates.append(parse_update(namespace, key, value))
        except ProgressError as e:
            failures.append(e)
    if failures:
        raise ReportRejected(failures)
    return updates
