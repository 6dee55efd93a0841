# controller/progress_controller.py
from typing import List
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from controller.controller_dependencies import get_progress_service, rate_limiter
from model.progress import TaskState
from service.progress_service import ProgressService
from util.constants import InternalURIs

progress_router = APIRouter(dependencies=[Depends(rate_limiter)])


@progress_router.get(InternalURIs.SEND, response_class=HTMLResponse)
async def send(
    token: str,
    request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> str:
    # Every query pair is one update; order and repeats are kept.
    await service.report(token, request.query_params.multi_items())
    return "OK"


@progress_router.get(InternalURIs.SEE, response_class=HTMLResponse)
async def see(
    token: str,
    service: ProgressService = Depends(get_progress_service),
) -> str:
    return await service.render_view(token)


@progress_router.get(InternalURIs.TASKS, response_model=List[TaskState])
async def list_task_states(
    token: str,
    prefix: str = Query(default=""),
    service: ProgressService = Depends(get_progress_service),
) -> List[TaskState]:
    return await service.states(token, prefix)
