"""Workflow API: creation, task/workflow transitions, assignment, summary."""

import pytest
from httpx import AsyncClient

TEMPLATE = {
    "id": "two-step",
    "name": "Two step",
    "workflow_type": "maintenance",
    "applicable_variants": ["traditional", "rank_rent", "gbp_only"],
    "tasks": [
        {
            "key": "first",
            "title": "First",
            "category": "content",
            "estimated_minutes": 10,
            "applicable_variants": ["traditional", "rank_rent", "gbp_only"],
        },
        {
            "key": "second",
            "title": "Second",
            "category": "reviews",
            "evidence_kind": "url",
            "estimated_minutes": 20,
            "applicable_variants": ["traditional"],
            "depends_on": ["first"],
        },
    ],
}


@pytest.fixture
async def workflow_id(client: AsyncClient, admin_headers) -> str:
    """Started traditional workflow over the two-step template."""
    published = await client.post("/api/v1/templates", json=TEMPLATE, headers=admin_headers)
    assert published.status_code == 201
    created = await client.post(
        "/api/v1/workflows",
        json={"template_id": "two-step", "target_id": "loc-9", "variant": "traditional"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    wid = created.json()["id"]
    started = await client.post(
        f"/api/v1/workflows/{wid}/transitions", json={"action": "start"}, headers=admin_headers
    )
    assert started.status_code == 200
    return wid


async def _task(client, headers, wid, task_id, action, evidence=None):
    body = {"action": action}
    if evidence is not None:
        body["evidence"] = evidence
    return await client.post(
        f"/api/v1/workflows/{wid}/tasks/{task_id}/transitions", json=body, headers=headers
    )


async def test_create_from_builtin_template(client: AsyncClient, team_headers) -> None:
    response = await client.post(
        "/api/v1/workflows",
        json={
            "template_id": "sop-new-location",
            "target_id": "loc-1",
            "variant": "rank_rent",
            "priority": "high",
        },
        headers=team_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "not_started"
    assert data["priority"] == "high"
    assert data["progress"] == 0
    assert data["due_date"]
    keys = [t["template_key"] for t in data["tasks"]]
    assert "initial-reviews" not in keys
    assert [t["id"] for t in data["tasks"]][:2] == ["task-001", "task-002"]


async def test_create_unsupported_variant_is_422(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        "/api/v1/workflows",
        json={"template_id": "sop-rebrand", "target_id": "loc-1", "variant": "rank_rent"},
        headers=admin_headers,
    )
    assert response.status_code == 422
    assert response.json()["error"] == "UNSUPPORTED_VARIANT"


async def test_create_requires_token(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/workflows",
        json={"template_id": "sop-maintenance", "target_id": "loc-1", "variant": "traditional"},
    )
    assert response.status_code == 401


async def test_client_role_is_read_only(
    client: AsyncClient, client_headers, workflow_id: str
) -> None:
    denied = await _task(client, client_headers, workflow_id, "task-001", "complete")
    assert denied.status_code == 403
    assert denied.json()["error"] == "UNAUTHORIZED"

    allowed = await client.get(f"/api/v1/workflows/{workflow_id}", headers=client_headers)
    assert allowed.status_code == 200


async def test_full_flow(client: AsyncClient, admin_headers, workflow_id: str) -> None:
    blocked = await _task(client, admin_headers, workflow_id, "task-002", "start")
    assert blocked.status_code == 409
    assert blocked.json()["error"] == "DEPENDENCY_NOT_SATISFIED"
    assert blocked.json()["details"]["blocking_task_ids"] == ["task-001"]

    workflow = (await client.get(f"/api/v1/workflows/{workflow_id}", headers=admin_headers)).json()
    assert [t["status"] for t in workflow["tasks"]] == ["pending", "blocked"]

    done = await _task(client, admin_headers, workflow_id, "task-001", "complete")
    assert done.status_code == 200
    assert done.json()["status"] == "completed"

    early = await client.post(
        f"/api/v1/workflows/{workflow_id}/transitions",
        json={"action": "complete"},
        headers=admin_headers,
    )
    assert early.status_code == 409
    assert early.json()["details"]["remaining_count"] == 1

    assert (await _task(client, admin_headers, workflow_id, "task-002", "start")).status_code == 200
    no_evidence = await _task(client, admin_headers, workflow_id, "task-002", "complete")
    assert no_evidence.status_code == 409
    assert no_evidence.json()["error"] == "EVIDENCE_REQUIRED"

    bad_url = await _task(client, admin_headers, workflow_id, "task-002", "complete", "nope")
    assert bad_url.status_code == 400

    finished = await _task(
        client, admin_headers, workflow_id, "task-002", "complete", "https://example.com/r/1"
    )
    assert finished.status_code == 200
    assert finished.json()["evidence"]["kind"] == "url"

    completed = await client.post(
        f"/api/v1/workflows/{workflow_id}/transitions",
        json={"action": "complete"},
        headers=admin_headers,
    )
    assert completed.status_code == 200
    assert completed.json()["status"] == "completed"
    assert completed.json()["progress"] == 100

    summary = await client.get(f"/api/v1/workflows/{workflow_id}/summary", headers=admin_headers)
    assert summary.status_code == 200
    data = summary.json()
    assert data["estimated_minutes_total"] == 30
    assert data["estimated_minutes_completed"] == 30
    assert {c["category"] for c in data["by_category"]} == {"content", "reviews"}


async def test_task_transition_on_paused_workflow(
    client: AsyncClient, admin_headers, workflow_id: str
) -> None:
    paused = await client.post(
        f"/api/v1/workflows/{workflow_id}/transitions",
        json={"action": "pause"},
        headers=admin_headers,
    )
    assert paused.json()["status"] == "paused"
    response = await _task(client, admin_headers, workflow_id, "task-001", "start")
    assert response.status_code == 409
    assert response.json()["error"] == "WORKFLOW_NOT_ACTIVE"


async def test_invalid_workflow_transition(
    client: AsyncClient, admin_headers, workflow_id: str
) -> None:
    response = await client.post(
        f"/api/v1/workflows/{workflow_id}/transitions",
        json={"action": "reopen"},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["details"]["current_status"] == "in_progress"


async def test_assign_task(client: AsyncClient, admin_headers, workflow_id: str) -> None:
    response = await client.put(
        f"/api/v1/workflows/{workflow_id}/tasks/task-001/assignee",
        json={"assignee_id": "tech-3"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["assignee_id"] == "tech-3"


async def test_unknown_task_404(client: AsyncClient, admin_headers, workflow_id: str) -> None:
    response = await _task(client, admin_headers, workflow_id, "task-404", "start")
    assert response.status_code == 404


async def test_list_workflows(client: AsyncClient, admin_headers, workflow_id: str) -> None:
    response = await client.get(
        "/api/v1/workflows", params={"status": "in_progress"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert [w["id"] for w in response.json()] == [workflow_id]

    response = await client.get(
        "/api/v1/workflows", params={"target_id": "elsewhere"}, headers=admin_headers
    )
    assert response.json() == []


async def test_unknown_workflow_404(client: AsyncClient, admin_headers) -> None:
    response = await client.get("/api/v1/workflows/missing", headers=admin_headers)
    assert response.status_code == 404


async def test_update_priority_and_due_date(
    client: AsyncClient, admin_headers, workflow_id: str
) -> None:
    url = f"/api/v1/workflows/{workflow_id}"
    response = await client.patch(
        url, json={"priority": "critical", "due_date": "2030-01-15"}, headers=admin_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["priority"] == "critical"
    assert data["due_date"] == "2030-01-15"
    assert data["status"] == "in_progress"
    assert data["version"] == 3

    cleared = await client.patch(url, json={"due_date": None}, headers=admin_headers)
    assert cleared.status_code == 200
    assert cleared.json()["due_date"] is None
    assert cleared.json()["priority"] == "critical"


async def test_update_rejections(
    client: AsyncClient, admin_headers, team_headers, workflow_id: str
) -> None:
    url = f"/api/v1/workflows/{workflow_id}"
    forbidden = await client.patch(url, json={"priority": "low"}, headers=team_headers)
    assert forbidden.status_code == 403

    empty = await client.patch(url, json={}, headers=admin_headers)
    assert empty.status_code == 400
    assert empty.json()["error"] == "VALIDATION_ERROR"

    null_priority = await client.patch(url, json={"priority": None}, headers=admin_headers)
    assert null_priority.status_code == 400

    status_field = await client.patch(url, json={"status": "completed"}, headers=admin_headers)
    assert status_field.status_code == 422

    missing = await client.patch(
        "/api/v1/workflows/wf-missing", json={"priority": "low"}, headers=admin_headers
    )
    assert missing.status_code == 404


async def test_update_refused_on_completed_workflow(
    client: AsyncClient, admin_headers, workflow_id: str
) -> None:
    for task_id in ("task-001", "task-002"):
        assert (await _task(client, admin_headers, workflow_id, task_id, "skip")).status_code == 200
    completed = await client.post(
        f"/api/v1/workflows/{workflow_id}/transitions",
        json={"action": "complete"},
        headers=admin_headers,
    )
    assert completed.status_code == 200

    response = await client.patch(
        f"/api/v1/workflows/{workflow_id}", json={"priority": "high"}, headers=admin_headers
    )
    assert response.status_code == 409
    assert response.json()["error"] == "INVALID_TRANSITION"
    assert response.json()["details"]["attempted"] == "update"
