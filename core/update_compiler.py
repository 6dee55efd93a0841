# core/update_compiler.py
from typing import List, Optional
from config.settings import settings
from core.identifiers import encode_key
from model.progress import Change, ChangeKind, Identifier, StoreOperation, Update
from repository.namespaces import CURRENT_FIELD, LABEL_FIELD, MAX_FIELD


def _operation(
    identifier: Identifier, field: str, change: Change, ttl: int
) -> Optional[StoreOperation]:
    if change.is_absent:
        return None
    key = encode_key(identifier.namespace, identifier.task, field)
    if change.kind is ChangeKind.DELETE:
        return StoreOperation(op="delete", key=key)
    # SET replaces the value and restarts the TTL from now.
    return StoreOperation(op="set", key=key, value=str(change.value), ttl=ttl)


def compile_update(update: Update, ttl: Optional[int] = None) -> List[StoreOperation]:
    """
    0-3 independent store operations, in label/current/max order.

    They are not atomic: a store fault between two of them leaves the task
    partially updated, and readers may observe that.
    """
    ttl = settings.STATE_TTL_SECONDS if ttl is None else ttl
    ops = [
        _operation(update.identifier, LABEL_FIELD, update.label, ttl),
        _operation(update.identifier, CURRENT_FIELD, update.current, ttl),
        _operation(update.identifier, MAX_FIELD, update.max, ttl),
    ]
    return [op for op in ops if op is not None]
