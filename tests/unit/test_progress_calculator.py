"""Tests for progress percentage, snapshots and completion summary."""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from sopflow.application.services import (
    ProgressCalculator,
    TaskStateMachine,
    WorkflowStateMachine,
    percentage,
)
from sopflow.domain.enums import (
    EvidenceKind,
    TaskAction,
    TaskCategory,
    TaskStatus,
    WorkflowAction,
    WorkflowStatus,
)
from sopflow.domain.value_objects import Evidence


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [(0, 0, 0), (0, 3, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1), (3, 3, 100)],
)
def test_percentage_rounds_half_up(completed: int, total: int, expected: int) -> None:
    assert percentage(completed, total) == expected


@given(st.integers(min_value=1, max_value=500), st.data())
def test_percentage_is_bounded_and_monotonic(total: int, data) -> None:
    completed = data.draw(st.integers(min_value=0, max_value=total))
    value = percentage(completed, total)
    assert 0 <= value <= 100
    if completed < total:
        assert percentage(completed + 1, total) >= value
    assert percentage(total, total) == 100


@settings(
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
@given(st.data())
def test_progress_never_drops_while_tasks_finish(
    make_workflow, make_task_template, fixed_now, data
) -> None:
    count = data.draw(st.integers(min_value=1, max_value=12), label="tasks")
    workflow = make_workflow([make_task_template(f"t{i}") for i in range(count)])
    order = data.draw(st.permutations(range(count)), label="order")
    tasks = TaskStateMachine(clock=lambda: fixed_now)
    calculator = ProgressCalculator()

    previous = calculator.progress(workflow)
    assert previous == 0
    for index in order:
        action = data.draw(st.sampled_from([TaskAction.COMPLETE, TaskAction.SKIP]))
        tasks.apply(workflow, workflow.tasks[index].id, action)
        current = calculator.progress(workflow)
        assert current >= previous
        if action == TaskAction.SKIP:
            assert current == previous
        previous = current

    WorkflowStateMachine(clock=lambda: fixed_now).apply(workflow, WorkflowAction.COMPLETE)
    assert calculator.progress(workflow) == 100 >= previous


def test_skipped_tasks_do_not_move_progress(make_workflow, make_task_template) -> None:
    workflow = make_workflow([make_task_template(k) for k in ("a", "b", "c", "d")])
    workflow.tasks[0].status = TaskStatus.COMPLETED
    workflow.tasks[1].status = TaskStatus.SKIPPED
    assert ProgressCalculator().progress(workflow) == 25


def test_completed_workflow_reports_100(make_workflow, make_task_template) -> None:
    workflow = make_workflow([make_task_template("a"), make_task_template("b")])
    workflow.tasks[0].status = TaskStatus.COMPLETED
    workflow.tasks[1].status = TaskStatus.SKIPPED
    workflow.status = WorkflowStatus.COMPLETED
    assert ProgressCalculator().progress(workflow) == 100


def test_snapshot_derives_display_status(make_workflow, make_task_template) -> None:
    workflow = make_workflow(
        [make_task_template("a"), make_task_template("b", depends_on=("a",))]
    )
    snapshot = ProgressCalculator().snapshot(workflow)
    assert snapshot.total_count == 2
    assert snapshot.progress == 0
    assert [t.status for t in snapshot.tasks] == [TaskStatus.PENDING, TaskStatus.BLOCKED]
    assert snapshot.tasks[1].blocking_task_ids == ("task-001",)
    assert snapshot.tasks[1].workflow_id == workflow.id


def test_snapshot_evidence(make_workflow, make_task_template, fixed_now) -> None:
    workflow = make_workflow([make_task_template("a", evidence_kind=EvidenceKind.TEXT)])
    task = workflow.tasks[0]
    task.status = TaskStatus.COMPLETED
    task.evidence = Evidence(EvidenceKind.TEXT, "Verified by phone", fixed_now)
    snap = ProgressCalculator().task_snapshot(workflow, task)
    assert snap.evidence.value == "Verified by phone"
    assert snap.evidence.recorded_at == fixed_now


def test_summary(make_workflow, make_task_template) -> None:
    workflow = make_workflow(
        [
            make_task_template("a", category=TaskCategory.GBP_SETUP, minutes=10),
            make_task_template("b", category=TaskCategory.CITATIONS, minutes=20),
            make_task_template("c", category=TaskCategory.GBP_SETUP, minutes=30),
            make_task_template("d", category=TaskCategory.REVIEWS, minutes=40),
        ]
    )
    a, b, c, _ = workflow.tasks
    a.status = TaskStatus.COMPLETED
    b.status = TaskStatus.SKIPPED
    c.status = TaskStatus.COMPLETED

    summary = ProgressCalculator().summary(workflow)
    assert summary.progress == 50
    assert (summary.completed_count, summary.skipped_count, summary.remaining_count) == (2, 1, 1)
    assert summary.skipped_required_task_ids == (b.id,)
    assert summary.estimated_minutes_total == 100
    assert summary.estimated_minutes_completed == 40
    assert [(c.category, c.total, c.completed, c.skipped) for c in summary.by_category] == [
        (TaskCategory.GBP_SETUP, 2, 2, 0),
        (TaskCategory.CITATIONS, 1, 0, 1),
        (TaskCategory.REVIEWS, 1, 0, 0),
    ]
