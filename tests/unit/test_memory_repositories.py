"""Tests for in-memory repositories and the per-workflow lock registry."""

import asyncio
from datetime import timedelta

import pytest

from sopflow.domain.enums import WorkflowStatus
from sopflow.domain.exceptions import (
    ResourceNotFoundException,
    ValidationException,
    WorkflowVersionConflictException,
)
from sopflow.infrastructure.memory import (
    InMemoryTemplateRepository,
    InMemoryWorkflowRepository,
)
from sopflow.infrastructure.services import WorkflowLockRegistry


async def test_template_add_and_list_sorted(make_template, make_task_template) -> None:
    repo = InMemoryTemplateRepository()
    await repo.add(make_template([make_task_template("a")], template_id="t2", name="Zeta"))
    await repo.add(make_template([make_task_template("a")], template_id="t1", name="Alpha"))
    assert [t.id for t in await repo.list_all()] == ["t1", "t2"]
    with pytest.raises(ValidationException):
        await repo.add(make_template([make_task_template("a")], template_id="t1"))


async def test_workflow_copies_are_isolated(make_workflow, make_task_template) -> None:
    repo = InMemoryWorkflowRepository()
    workflow = make_workflow([make_task_template("a")])
    await repo.add(workflow)

    loaded = await repo.get_by_id(workflow.id)
    loaded.tasks[0].assignee_id = "someone"
    again = await repo.get_by_id(workflow.id)
    assert again.tasks[0].assignee_id is None
    assert await repo.get_by_id("missing") is None


async def test_save_bumps_version_and_detects_conflict(make_workflow, make_task_template) -> None:
    repo = InMemoryWorkflowRepository()
    await repo.add(make_workflow([make_task_template("a")]))
    first = await repo.get_by_id("wf-1")
    second = await repo.get_by_id("wf-1")

    saved = await repo.save(first)
    assert saved.version == 2
    with pytest.raises(WorkflowVersionConflictException):
        await repo.save(second)
    assert (await repo.get_by_id("wf-1")).version == 2


async def test_save_unknown_workflow(make_workflow, make_task_template) -> None:
    with pytest.raises(ResourceNotFoundException):
        await InMemoryWorkflowRepository().save(make_workflow([make_task_template("a")]))


async def test_list_filters_and_orders_newest_first(make_workflow, make_task_template) -> None:
    repo = InMemoryWorkflowRepository()
    older = make_workflow([make_task_template("a")])
    newer = make_workflow([make_task_template("a")], status=WorkflowStatus.PAUSED)
    newer.created_at = older.created_at + timedelta(minutes=5)
    newer.target_id = "loc-2"
    await repo.add(older)
    await repo.add(newer)

    assert [w.id for w in await repo.list()] == [newer.id, older.id]
    assert [w.id for w in await repo.list(status=WorkflowStatus.IN_PROGRESS)] == [older.id]
    assert [w.id for w in await repo.list(target_id="loc-2")] == [newer.id]
    assert [w.id for w in await repo.list(skip=1, limit=1)] == [older.id]


async def test_lock_serializes_same_workflow() -> None:
    locks = WorkflowLockRegistry()
    events: list[str] = []

    async def worker(name: str) -> None:
        async with locks.lock("wf-1"):
            events.append(f"{name}-in")
            await asyncio.sleep(0.01)
            events.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))
    assert events in (
        ["a-in", "a-out", "b-in", "b-out"],
        ["b-in", "b-out", "a-in", "a-out"],
    )
    assert len(locks) == 0


async def test_lock_does_not_block_other_workflows() -> None:
    locks = WorkflowLockRegistry()
    async with locks.lock("wf-1"):
        async with asyncio.timeout(1):
            async with locks.lock("wf-2"):
                assert len(locks) == 2
