# core/identifiers.py
import re
from typing import Final
from model.progress import Identifier
from repository.namespaces import ROOT, SEPARATOR, WILDCARD
from util.errors import BadStructure, InvalidCharset, InvalidField

# ASCII only; no glob metacharacters, so patterns never need escaping.
_SEGMENT_RE: Final = re.compile(r"[A-Za-z0-9_.\-]*")


def is_valid_segment(segment: str) -> bool:
    return _SEGMENT_RE.fullmatch(segment) is not None


def validate(segment: str, what: str = "segment") -> str:
    if not is_valid_segment(segment):
        raise InvalidCharset(segment, what)
    return segment


def validate_task(task: str) -> str:
    # Tasks may be multi-segment ("build:step1"); each segment is checked.
    for part in task.split(SEPARATOR):
        validate(part, "task")
    return task


def encode_key(namespace: str, task: str, field: str) -> str:
    """
    Flat store key for one sub-field: "pcafe:<namespace>:<task>:<field>".

    Output must stay byte-identical across versions, since keys written by
    one deployment are read back by the next.
    """
    validate(namespace, "namespace")
    validate_task(task)
    if SEPARATOR in field:
        raise InvalidField(field)
    return SEPARATOR.join((ROOT, namespace, task, field))


def encode_pattern(namespace: str, task_prefix: str = "") -> str:
    """SCAN MATCH pattern for every key whose task starts with `task_prefix`."""
    validate(namespace, "namespace")
    validate_task(task_prefix)
    return SEPARATOR.join((ROOT, namespace, task_prefix)) + WILDCARD


def decode_key(raw: str) -> Identifier:
    """
    Inverse of encode_key. First segment after the prefix is the namespace,
    the last one is the field, everything in between is the task.

    Raises InvalidCharset or BadStructure; keys from other producers are
    rejected rather than guessed at.
    """
    parts = raw.split(SEPARATOR)
    for part in parts:
        validate(part)
    if len(parts) < 3 or parts[0] != ROOT:
        raise BadStructure(raw)
    return Identifier(
        namespace=parts[1],
        task=SEPARATOR.join(parts[2:-1]),
        field=parts[-1],
    )
