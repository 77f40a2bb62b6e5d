"""Tests for DependencyGraphValidator (dangling references, cycles)."""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from sopflow.application.services import DependencyGraphValidator
from sopflow.domain.exceptions import CyclicDependencyException, DanglingDependencyException


@pytest.fixture
def validator() -> DependencyGraphValidator:
    return DependencyGraphValidator()


def test_accepts_dag(validator, make_task_template) -> None:
    validator.validate(
        [
            make_task_template("a"),
            make_task_template("b", depends_on=("a",)),
            make_task_template("c", depends_on=("a", "b")),
        ]
    )


def test_self_loop_is_a_cycle(validator, make_task_template) -> None:
    with pytest.raises(CyclicDependencyException) as exc_info:
        validator.validate([make_task_template("a", depends_on=("a",))])
    assert exc_info.value.details["cycle"] == ["a", "a"]


def test_reports_cycle_path(validator, make_task_template) -> None:
    tasks = [
        make_task_template("a", depends_on=("c",)),
        make_task_template("b", depends_on=("a",)),
        make_task_template("c", depends_on=("b",)),
    ]
    with pytest.raises(CyclicDependencyException) as exc_info:
        validator.validate(tasks)
    assert exc_info.value.details["cycle"] == ["a", "c", "b", "a"]


def test_dangling_reported_before_cycle(validator, make_task_template) -> None:
    tasks = [
        make_task_template("a", depends_on=("b",)),
        make_task_template("b", depends_on=("a", "missing")),
    ]
    with pytest.raises(DanglingDependencyException) as exc_info:
        validator.validate(tasks)
    assert exc_info.value.details == {"task_key": "b", "missing_key": "missing"}


@st.composite
def _dags(draw):
    """Random DAG: edges only point to earlier keys."""
    n = draw(st.integers(min_value=1, max_value=12))
    keys = [f"t{i}" for i in range(n)]
    edges = {
        key: tuple(
            sorted(draw(st.sets(st.sampled_from(keys[:i]), max_size=i))) if i else ()
        )
        for i, key in enumerate(keys)
    }
    return keys, edges


@settings(
    max_examples=75,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
@given(_dags())
def test_random_dags_pass(make_task_template, graph) -> None:
    keys, edges = graph
    tasks = [make_task_template(k, depends_on=edges[k]) for k in keys]
    DependencyGraphValidator().validate(tasks)


@settings(
    max_examples=75,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
@given(_dags(), st.data())
def test_back_edge_creates_detected_cycle(make_task_template, graph, data) -> None:
    keys, edges = graph
    # Close a cycle: the first key depends on some key that (transitively) depends on it,
    # or on itself when there is no such key.
    reachers = [k for k in keys if keys[0] in edges[k]]
    target = data.draw(st.sampled_from(reachers)) if reachers else keys[0]
    edges = {**edges, keys[0]: edges[keys[0]] + (target,)}
    tasks = [make_task_template(k, depends_on=edges[k]) for k in keys]

    with pytest.raises(CyclicDependencyException) as exc_info:
        DependencyGraphValidator().validate(tasks)
    cycle = exc_info.value.details["cycle"]
    assert cycle[0] == cycle[-1]
    for src, dst in zip(cycle, cycle[1:]):
        assert dst in edges[src]
