"""Tests for TaskStateMachine (transition table, gating, evidence)."""

import pytest

from sopflow.application.services import TaskStateMachine
from sopflow.domain.enums import EvidenceKind, TaskAction, TaskStatus, WorkflowStatus
from sopflow.domain.exceptions import (
    DependencyNotSatisfiedException,
    EvidenceRequiredException,
    InvalidTransitionException,
    ResourceNotFoundException,
    ValidationException,
    WorkflowNotActiveException,
)

STORED = [TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED, TaskStatus.SKIPPED]

# (action, from) -> to, for a task whose evidence kind is 'none'. Anything else is rejected.
LEGAL = {
    (TaskAction.START, TaskStatus.PENDING): TaskStatus.IN_PROGRESS,
    (TaskAction.COMPLETE, TaskStatus.PENDING): TaskStatus.COMPLETED,
    (TaskAction.COMPLETE, TaskStatus.IN_PROGRESS): TaskStatus.COMPLETED,
    (TaskAction.SKIP, TaskStatus.PENDING): TaskStatus.SKIPPED,
    (TaskAction.SKIP, TaskStatus.IN_PROGRESS): TaskStatus.SKIPPED,
}


@pytest.fixture
def machine(fixed_now) -> TaskStateMachine:
    return TaskStateMachine(clock=lambda: fixed_now)


@pytest.mark.parametrize("action", list(TaskAction))
@pytest.mark.parametrize("status", STORED)
def test_transition_table(
    machine, make_workflow, make_task_template, action, status
) -> None:
    workflow = make_workflow([make_task_template("a")])
    task = workflow.tasks[0]
    task.status = status
    expected = LEGAL.get((action, status))
    if expected is None:
        with pytest.raises(InvalidTransitionException) as exc_info:
            machine.apply(workflow, task.id, action)
        assert exc_info.value.details["current_status"] == status.value
        assert task.status == status
    else:
        assert machine.apply(workflow, task.id, action).status == expected


@pytest.mark.parametrize("dep_status", STORED, ids=lambda s: f"dep-{s.value}")
@pytest.mark.parametrize("status", STORED, ids=lambda s: f"task-{s.value}")
def test_start_over_task_and_dependency_statuses(
    machine, make_workflow, make_task_template, status, dep_status
) -> None:
    workflow = make_workflow(
        [make_task_template("a"), make_task_template("b", depends_on=("a",))]
    )
    dependency, task = workflow.tasks
    dependency.status = dep_status
    task.status = status

    if status != TaskStatus.PENDING:
        with pytest.raises(InvalidTransitionException):
            machine.apply(workflow, task.id, TaskAction.START)
        assert task.status == status
    elif dep_status in TaskStatus.terminal():
        assert machine.apply(workflow, task.id, TaskAction.START).status == TaskStatus.IN_PROGRESS
    else:
        with pytest.raises(DependencyNotSatisfiedException) as exc_info:
            machine.apply(workflow, task.id, TaskAction.START)
        assert exc_info.value.details["blocking_task_ids"] == [dependency.id]
        assert task.status == TaskStatus.PENDING
    assert dependency.status == dep_status


@pytest.mark.parametrize(
    "status", [WorkflowStatus.NOT_STARTED, WorkflowStatus.PAUSED, WorkflowStatus.COMPLETED]
)
@pytest.mark.parametrize("action", list(TaskAction))
def test_workflow_must_be_active(
    machine, make_workflow, make_task_template, status, action
) -> None:
    workflow = make_workflow([make_task_template("a")], status=status)
    with pytest.raises(WorkflowNotActiveException):
        machine.apply(workflow, "task-001", action)
    assert workflow.tasks[0].status == TaskStatus.PENDING


def test_unknown_task(machine, make_workflow, make_task_template) -> None:
    workflow = make_workflow([make_task_template("a")])
    with pytest.raises(ResourceNotFoundException):
        machine.apply(workflow, "task-042", TaskAction.START)


def test_dependency_gating_then_success(
    machine, fixed_now, make_workflow, make_task_template
) -> None:
    workflow = make_workflow(
        [make_task_template("a"), make_task_template("b", depends_on=("a",))]
    )
    with pytest.raises(DependencyNotSatisfiedException) as exc_info:
        machine.apply(workflow, "task-002", TaskAction.START)
    assert exc_info.value.details["blocking_task_ids"] == ["task-001"]

    machine.apply(workflow, "task-001", TaskAction.COMPLETE)
    task = machine.apply(workflow, "task-002", TaskAction.START)
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.started_at == fixed_now


def test_skipped_dependency_satisfies_gate(machine, make_workflow, make_task_template) -> None:
    workflow = make_workflow(
        [make_task_template("a"), make_task_template("b", depends_on=("a",))]
    )
    machine.apply(workflow, "task-001", TaskAction.SKIP)
    assert machine.apply(workflow, "task-002", TaskAction.START).status == TaskStatus.IN_PROGRESS


def test_complete_is_gated_too(machine, make_workflow, make_task_template) -> None:
    workflow = make_workflow(
        [make_task_template("a"), make_task_template("b", depends_on=("a",))]
    )
    with pytest.raises(DependencyNotSatisfiedException):
        machine.apply(workflow, "task-002", TaskAction.COMPLETE)


def test_skip_ignores_dependencies(machine, make_workflow, make_task_template) -> None:
    workflow = make_workflow(
        [make_task_template("a"), make_task_template("b", depends_on=("a",))]
    )
    assert machine.apply(workflow, "task-002", TaskAction.SKIP).status == TaskStatus.SKIPPED


def test_evidence_task_cannot_complete_from_pending(
    machine, make_workflow, make_task_template
) -> None:
    workflow = make_workflow([make_task_template("a", evidence_kind=EvidenceKind.URL)])
    with pytest.raises(InvalidTransitionException):
        machine.apply(workflow, "task-001", TaskAction.COMPLETE, "https://example.com")


def test_evidence_required(
    machine, fixed_now, make_workflow, make_task_template
) -> None:
    workflow = make_workflow([make_task_template("a", evidence_kind=EvidenceKind.SCREENSHOT)])
    machine.apply(workflow, "task-001", TaskAction.START)
    with pytest.raises(EvidenceRequiredException):
        machine.apply(workflow, "task-001", TaskAction.COMPLETE, "  ")
    assert workflow.tasks[0].status == TaskStatus.IN_PROGRESS

    task = machine.apply(workflow, "task-001", TaskAction.COMPLETE, "s3://shots/1.png")
    assert task.status == TaskStatus.COMPLETED
    assert task.evidence.kind == EvidenceKind.SCREENSHOT
    assert task.evidence.value == "s3://shots/1.png"
    assert task.completed_at == fixed_now


def test_malformed_url_evidence(machine, make_workflow, make_task_template) -> None:
    workflow = make_workflow([make_task_template("a", evidence_kind=EvidenceKind.URL)])
    machine.apply(workflow, "task-001", TaskAction.START)
    with pytest.raises(ValidationException) as exc_info:
        machine.apply(workflow, "task-001", TaskAction.COMPLETE, "example.com")
    assert exc_info.value.details["field"] == "evidence"


def test_evidence_ignored_for_kind_none(
    machine, fixed_now, make_workflow, make_task_template
) -> None:
    workflow = make_workflow([make_task_template("a")])
    task = machine.apply(workflow, "task-001", TaskAction.COMPLETE, "extra text")
    assert task.evidence is None
    assert task.started_at == fixed_now


def test_skip_sets_completed_at(
    machine, fixed_now, make_workflow, make_task_template
) -> None:
    workflow = make_workflow([make_task_template("a")])
    task = machine.apply(workflow, "task-001", TaskAction.SKIP)
    assert task.completed_at == fixed_now
