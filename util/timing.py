# util/timing.py
import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[None]:
    """
    with timed(logger, "progress.view", ns="abc"):
        ...

    Logs "<name>.done ms=<int> k=v" at INFO, or "<name>.failed ..." at WARNING
    when the block raises (the exception still propagates).
    """
    t0 = time.perf_counter()
    outcome = "failed"
    try:
        yield
        outcome = "done"
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        level = logging.INFO if outcome == "done" else logging.WARNING
        logger.log(level, "%s.%s ms=%d%s", name, outcome, dt_ms, suffix)
