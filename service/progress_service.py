# service/progress_service.py
import html
import logging
from typing import Iterable, List, Tuple
from core.update_parser import parse_updates
from model.progress import Identifier, TaskState
from repository.progress_repository import ProgressRepository
from util.timing import timed

logger = logging.getLogger(__name__)

# Display defaults for fields that are not stored.
DEFAULT_CURRENT = 0
DEFAULT_MAX = 100
DEFAULT_LABEL = "?"
LINE_SEP = "<br/><br/><br/>\n\n\n"


def render_line(state: TaskState) -> str:
    current = DEFAULT_CURRENT if state.current is None else state.current
    max_ = DEFAULT_MAX if state.max is None else state.max
    label = DEFAULT_LABEL if state.label is None else state.label
    return (
        f"<b>{html.escape(state.task)}</b> "
        f"<progress value='{current}' max='{max_}'>what </progress> "
        f"<i>{html.escape(label)}</i>"
    )


def _task_sort_key(ident: Identifier) -> str:
    return ident.task


class ProgressService:
    def __init__(self, repo: ProgressRepository) -> None:
        self._repo = repo

    async def report(self, namespace: str, pairs: Iterable[Tuple[str, str]]) -> int:
        """
        Parse every pair first (ReportRejected lists each bad one and nothing
        is written), then apply the updates in request order.
        Returns the number of store operations issued.
        """
        updates = parse_updates(namespace, pairs)
        issued = 0
        for u in updates:
            issued += await self._repo.apply(u)
        logger.info(
            "progress.report.ok ns=%s updates=%d ops=%d", namespace, len(updates), issued
        )
        return issued

    async def states(self, namespace: str, task_prefix: str = "") -> List[TaskState]:
        idents = sorted(
            await self._repo.list_tasks(namespace, task_prefix), key=_task_sort_key
        )
        out: List[TaskState] = []
        for ident in idents:
            record = await self._repo.read_state(ident)
            out.append(TaskState(task=ident.task, **record.model_dump()))
        return out

    async def render_view(self, namespace: str) -> str:
        with timed(logger, "progress.view", ns=namespace):
            states = await self.states(namespace)
        return LINE_SEP.join(render_line(s) for s in states)
