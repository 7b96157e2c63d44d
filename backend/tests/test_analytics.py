"""Dashboard analytics and the per-user team report."""
import pytest

from services.analytics import performance_score


def _complete(client, delegation, completed_at):
    payload = {
        "taskName": delegation["task_name"],
        "assignedBy": delegation["assigned_by"],
        "assignedTo": delegation["assigned_to"],
        "status": "Completed",
        "completedAt": completed_at,
    }
    response = client.put(f"/delegations/{delegation['id']}", json=payload)
    assert response.status_code == 200


def test_empty_analytics(client):
    body = client.get("/analytics").json()

    assert body == {
        "totalDelegations": 0,
        "completedDelegations": 0,
        "pendingDelegations": 0,
        "overdueDelegations": 0,
        "topPerformers": [],
        "recentActivity": [],
    }


def test_summary_counts_exclude_in_progress(client, make_delegation):
    for status in ("Completed", "Completed", "Pending", "Overdue", "In Progress"):
        make_delegation(status=status)

    body = client.get("/analytics").json()

    assert body["totalDelegations"] == 5
    assert body["completedDelegations"] == 2
    assert body["pendingDelegations"] == 1
    assert body["overdueDelegations"] == 1
    counted = body["completedDelegations"] + body["pendingDelegations"] + body["overdueDelegations"]
    assert counted < body["totalDelegations"]


def test_top_performers_sorted_and_limited(client, make_user, make_delegation):
    make_user("ann@x.com", "Ann", "Lee")
    make_user("nameless@x.com")
    for email, count in (("ann@x.com", 3), ("bob@x.com", 1), ("nameless@x.com", 2), ("cy@x.com", 1)):
        for _ in range(count):
            make_delegation(assigned_to=email, status="Completed")
    make_delegation(assigned_to="bob@x.com", status="Pending")

    performers = client.get("/analytics").json()["topPerformers"]

    # bob and cy tie on 1; the email tiebreak keeps bob
    assert performers == [
        {"name": "Ann Lee", "completed": 3},
        {"name": "nameless@x.com", "completed": 2},
        {"name": "bob@x.com", "completed": 1},
    ]


def test_top_performers_limit_parameter(client, make_delegation):
    for email in ("a@x.com", "b@x.com", "c@x.com", "d@x.com"):
        make_delegation(assigned_to=email, status="Completed")

    body = client.get("/analytics", params={"top": 4}).json()

    assert len(body["topPerformers"]) == 4


def test_invalid_limit_is_rejected(client):
    assert client.get("/analytics", params={"top": 0}).status_code == 400


def test_recent_activity_newest_completion_first(client, make_user, make_delegation):
    make_user("ann@x.com", "Ann", None)
    tasks = [make_delegation(task_name=f"task {i}", assigned_to="ann@x.com") for i in range(4)]
    for i, delegation in enumerate(tasks):
        _complete(client, delegation, f"2026-10-0{i + 1}T10:00:00")

    activity = client.get("/analytics").json()["recentActivity"]

    assert [item["task"] for item in activity] == ["task 3", "task 2", "task 1"]
    assert all(item["user"] == "Ann" for item in activity)
    assert activity[0]["date"].startswith("2026-10-04T10:00:00")


def test_team_report(client, make_user, make_delegation):
    make_user("ann@x.com", "Ann", "Lee", role="Dev", department="R&D", phone="123")
    make_user("idle@x.com")
    make_delegation(assigned_to="ann@x.com", status="Completed")
    make_delegation(assigned_to="ann@x.com", status="In Progress")

    team = client.get("/team").json()

    assert team == [
        {
            "id": "ann@x.com",
            "name": "Ann Lee",
            "email": "ann@x.com",
            "role": "Dev",
            "department": "R&D",
            "phone": "123",
            "status": "Active",
            "tasksAssigned": 2,
            "tasksCompleted": 1,
            "tasksInProgress": 1,
            "tasksPending": 0,
            "tasksOverdue": 0,
            "performanceScore": 50,
        },
        {
            "id": "idle@x.com",
            "name": "idle@x.com",
            "email": "idle@x.com",
            "role": None,
            "department": None,
            "phone": None,
            "status": "Active",
            "tasksAssigned": 0,
            "tasksCompleted": 0,
            "tasksInProgress": 0,
            "tasksPending": 0,
            "tasksOverdue": 0,
            "performanceScore": 0,
        },
    ]


@pytest.mark.parametrize("assigned, completed, expected", [
    (0, 0, 0),
    (2, 1, 50),
    (3, 1, 33),
    (3, 2, 67),
    (40, 1, 3),
    (5, 5, 100),
])
def test_performance_score(assigned, completed, expected):
    assert performance_score(assigned, completed) == expected
