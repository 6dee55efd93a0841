# tests/test_progress_service.py

from __future__ import annotations

import logging

import pytest

from model.progress import TaskState
from service.progress_service import LINE_SEP, ProgressService, render_line
from util.errors import ReportRejected

from .fakes import FakeRedis


def test_render_line_applies_display_defaults() -> None:
    assert render_line(TaskState(task="build")) == (
        "<b>build</b> <progress value='0' max='100'>what </progress> <i>?</i>"
    )


def test_render_line_escapes_stored_label() -> None:
    line = render_line(TaskState(task="t", label="<script>", current=1, max=2))
    assert "<i>&lt;script&gt;</i>" in line
    assert "value='1' max='2'" in line


@pytest.mark.asyncio
async def test_report_is_all_or_nothing_on_parse_errors(
    service: ProgressService, fake_redis: FakeRedis
) -> None:
    with pytest.raises(ReportRejected) as ei:
        await service.report("tok", [("good", "1/2"), ("bad", "abc/100")])
    assert [f.key for f in ei.value.failures] == ["bad"]
    assert fake_redis.calls == []


@pytest.mark.asyncio
async def test_report_counts_operations(service: ProgressService) -> None:
    assert await service.report("tok", [("a", "x!1/2"), ("b", "/null")]) == 4


@pytest.mark.asyncio
async def test_states_sorted_by_task(service: ProgressService) -> None:
    await service.report("tok", [("zeta", "1"), ("alpha", "go!2/4"), ("mid:x", "")])
    states = await service.states("tok")
    assert [s.task for s in states] == ["alpha", "zeta"]
    assert states[0] == TaskState(task="alpha", label="go", current=2, max=4)
    assert states[1] == TaskState(task="zeta", current=1)


@pytest.mark.asyncio
async def test_render_view(service: ProgressService, caplog: pytest.LogCaptureFixture) -> None:
    await service.report("tok", [("b", "1/3"), ("a", "done!")])
    with caplog.at_level(logging.INFO):
        body = await service.render_view("tok")
    assert body == LINE_SEP.join(
        [
            "<b>a</b> <progress value='0' max='100'>what </progress> <i>done</i>",
            "<b>b</b> <progress value='1' max='3'>what </progress> <i>?</i>",
        ]
    )
    assert any("progress.view.done" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_render_view_empty_namespace(service: ProgressService) -> None:
    assert await service.render_view("nobody") == ""
