# model/progress.py
from enum import Enum
from typing import Literal, NamedTuple, Optional, Union
from pydantic import BaseModel, ConfigDict


class Identifier(BaseModel):
    """
    One task inside a namespace. `field` is only set when the identifier
    addresses a single stored sub-value (what decode_key returns); the bare
    form is what enumeration hands out.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str
    task: str
    field: Optional[str] = None

    def bare(self) -> "Identifier":
        if self.field is None:
            return self
        return Identifier(namespace=self.namespace, task=self.task)


class ChangeKind(str, Enum):
    ABSENT = "absent"  # not mentioned, leave the store alone
    DELETE = "delete"
    SET = "set"


class Change(NamedTuple):
    kind: ChangeKind
    value: Union[int, str, None] = None

    @property
    def is_absent(self) -> bool:
        return self.kind is ChangeKind.ABSENT


ABSENT = Change(ChangeKind.ABSENT)
DELETE = Change(ChangeKind.DELETE)


def set_to(value: Union[int, str]) -> Change:
    if value is None:
        raise ValueError("use DELETE to clear a field")
    return Change(ChangeKind.SET, value)


class Update(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: Identifier
    label: Change = ABSENT
    current: Change = ABSENT
    max: Change = ABSENT


class StoreOperation(NamedTuple):
    op: Literal["set", "delete"]
    key: str
    value: Optional[str] = None
    ttl: Optional[int] = None


class StateRecord(BaseModel):
    # Raw stored values; display defaults are applied by the view.
    label: Optional[str] = None
    current: Optional[int] = None
    max: Optional[int] = None


class TaskState(BaseModel):
    task: str
    label: Optional[str] = None
    current: Optional[int] = None
    max: Optional[int] = None
