# tests/test_update_compiler.py

from __future__ import annotations

from core.update_compiler import compile_update
from model.progress import ABSENT, DELETE, Identifier, StoreOperation, Update, set_to

IDENT = Identifier(namespace="tok", task="build")


def test_delete_label_and_set_max() -> None:
    u = Update(identifier=IDENT, label=DELETE, current=ABSENT, max=set_to(10))
    assert compile_update(u, ttl=14400) == [
        StoreOperation(op="delete", key="pcafe:tok:build:state"),
        StoreOperation(op="set", key="pcafe:tok:build:max", value="10", ttl=14400),
    ]


def test_all_absent_compiles_to_nothing() -> None:
    assert compile_update(Update(identifier=IDENT)) == []


def test_all_three_set_in_field_order() -> None:
    u = Update(identifier=IDENT, label=set_to("run"), current=set_to(3), max=set_to(-1))
    ops = compile_update(u, ttl=5)
    assert [(o.op, o.key, o.value, o.ttl) for o in ops] == [
        ("set", "pcafe:tok:build:state", "run", 5),
        ("set", "pcafe:tok:build:current", "3", 5),
        ("set", "pcafe:tok:build:max", "-1", 5),
    ]


def test_default_ttl_is_four_hours() -> None:
    (op,) = compile_update(Update(identifier=IDENT, current=set_to(1)))
    assert op.ttl == 4 * 60 * 60
