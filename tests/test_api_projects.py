"""Tests for project and membership API endpoints."""

import pytest


@pytest.fixture
def contact(client):
    response = client.post(
        "/api/v1/contact",
        json={"firstName": "Katherine", "lastName": "Johnson", "email": "kj@example.com"},
    )
    return response.json()["data"]


@pytest.fixture
def project(client):
    response = client.post("/api/v1/project", json={"name": "Mercury", "description": "Orbit"})
    return response.json()["data"]


def _add_member(client, project_id, contact_id, **body):
    body["contactId"] = contact_id
    return client.post(f"/api/v1/project/{project_id}/members", json=body)


class TestCreateProject:
    """Test POST /api/v1/project."""

    def test_create_defaults(self, client):
        response = client.post("/api/v1/project", json={"name": "  Gemini  "})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Project created"
        data = body["data"]
        assert data["name"] == "Gemini"
        assert data["status"] == "active"
        assert data["startDate"] is not None
        assert data["endDate"] is None
        assert data["members"] == []
        assert data["tasks"] == []
        assert data["_count"] == {"tasks": 0, "members": 0}

    def test_create_with_dates(self, client):
        response = client.post(
            "/api/v1/project",
            json={
                "name": "Apollo",
                "status": "planning",
                "startDate": "2024-01-01T00:00:00",
                "endDate": "2024-12-31T00:00:00",
            },
        )

        data = response.json()["data"]
        assert data["status"] == "planning"
        assert data["startDate"].startswith("2024-01-01")
        assert data["endDate"].startswith("2024-12-31")

    def test_name_required(self, client):
        response = client.post("/api/v1/project", json={"description": "No name"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "name"


class TestListProjects:
    """Test GET /api/v1/project/list."""

    def test_list_includes_counts(self, client, project, contact):
        _add_member(client, project["id"], contact["id"])
        client.post("/api/v1/task", json={"title": "Launch", "projectId": project["id"]})
        client.post("/api/v1/task", json={"title": "Land", "projectId": project["id"]})

        response = client.get("/api/v1/project/list")

        assert response.status_code == 200
        assert response.json()["message"] == "Projects retrieved"
        (item,) = response.json()["data"]
        assert item["_count"] == {"tasks": 2, "members": 1}
        assert item["members"][0]["contact"]["email"] == "kj@example.com"
        assert set(item["tasks"][0]) == {"id", "title", "status", "priority"}

    def test_newest_first(self, client):
        first = client.post("/api/v1/project", json={"name": "First"}).json()["data"]
        second = client.post("/api/v1/project", json={"name": "Second"}).json()["data"]

        data = client.get("/api/v1/project/list").json()["data"]

        assert [p["id"] for p in data] == [second["id"], first["id"]]

    def test_filter_by_status(self, client):
        client.post("/api/v1/project", json={"name": "Live"})
        archived = client.post(
            "/api/v1/project", json={"name": "Old", "status": "archived"}
        ).json()["data"]

        data = client.get("/api/v1/project/list", params={"status": "archived"}).json()["data"]

        assert [p["id"] for p in data] == [archived["id"]]


class TestGetProject:
    """Test GET /api/v1/project/{id}."""

    def test_detail_orders_tasks(self, client, project, contact):
        pid = project["id"]
        low = client.post(
            "/api/v1/task", json={"title": "Low", "priority": "LOW", "projectId": pid}
        ).json()["data"]
        urgent = client.post(
            "/api/v1/task",
            json={
                "title": "Urgent",
                "priority": "URGENT",
                "projectId": pid,
                "assigneeId": contact["id"],
            },
        ).json()["data"]

        response = client.get(f"/api/v1/project/{pid}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [t["id"] for t in data["tasks"]] == [urgent["id"], low["id"]]
        assert data["tasks"][0]["assignee"]["firstName"] == "Katherine"
        assert data["_count"]["tasks"] == 2

    def test_missing(self, client):
        response = client.get("/api/v1/project/999")

        assert response.status_code == 404
        assert response.json()["message"] == "Project not found"


class TestUpdateProject:
    def test_partial_update(self, client, project):
        response = client.put(f"/api/v1/project/{project['id']}", json={"status": "completed"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "completed"
        assert data["name"] == "Mercury"
        assert data["description"] == "Orbit"

    def test_missing(self, client):
        response = client.put("/api/v1/project/999", json={"name": "Ghost"})

        assert response.status_code == 404


class TestDeleteProject:
    """Deleting a project removes its tasks and memberships."""

    def test_delete_cascades(self, client, project, contact):
        _add_member(client, project["id"], contact["id"])
        task = client.post(
            "/api/v1/task", json={"title": "Launch", "projectId": project["id"]}
        ).json()["data"]

        response = client.delete(f"/api/v1/project/{project['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "Project deleted"
        assert client.get(f"/api/v1/project/{project['id']}").status_code == 404
        assert client.get(f"/api/v1/task/{task['id']}").status_code == 404
        assert client.get(f"/api/v1/contact/{contact['id']}").status_code == 200

    def test_delete_missing(self, client):
        assert client.delete("/api/v1/project/999").status_code == 404


class TestMembers:
    """Test /api/v1/project/{id}/members."""

    def test_add_member(self, client, project, contact):
        response = _add_member(client, project["id"], contact["id"], role="lead")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Member added to project"
        data = body["data"]
        assert data["role"] == "lead"
        assert data["contactId"] == contact["id"]
        assert data["projectId"] == project["id"]
        assert data["contact"]["lastName"] == "Johnson"
        assert data["project"]["name"] == "Mercury"
        assert data["joinedAt"] is not None

    def test_default_role(self, client, project, contact):
        response = _add_member(client, project["id"], contact["id"])

        assert response.json()["data"]["role"] == "member"

    def test_duplicate_member(self, client, project, contact):
        _add_member(client, project["id"], contact["id"])

        response = _add_member(client, project["id"], contact["id"], role="lead")

        assert response.status_code == 409
        assert response.json()["message"] == "This contact is already a member of the project"

    def test_unknown_contact(self, client, project):
        response = _add_member(client, project["id"], 999)

        assert response.status_code == 404
        assert response.json()["message"] == "Project or contact not found"

    def test_unknown_project(self, client, contact):
        response = _add_member(client, 999, contact["id"])

        assert response.status_code == 404

    def test_contact_id_required(self, client, project):
        response = client.post(f"/api/v1/project/{project['id']}/members", json={"role": "lead"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "contactId"

    def test_oversized_contact_id(self, client, project):
        response = _add_member(client, project["id"], 2**70)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "contactId"

    def test_list_members_in_join_order(self, client, project, contact):
        other = client.post(
            "/api/v1/contact",
            json={"firstName": "Dorothy", "lastName": "Vaughan", "email": "dv@example.com"},
        ).json()["data"]
        _add_member(client, project["id"], contact["id"])
        _add_member(client, project["id"], other["id"])

        response = client.get(f"/api/v1/project/{project['id']}/members")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [m["contactId"] for m in data] == [contact["id"], other["id"]]

    def test_list_members_unknown_project(self, client):
        response = client.get("/api/v1/project/999/members")

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_remove_member(self, client, project, contact):
        _add_member(client, project["id"], contact["id"])

        response = client.delete(f"/api/v1/project/{project['id']}/members/{contact['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "Member removed from project"
        assert client.get(f"/api/v1/project/{project['id']}/members").json()["data"] == []

    def test_remove_non_member(self, client, project, contact):
        response = client.delete(f"/api/v1/project/{project['id']}/members/{contact['id']}")

        assert response.status_code == 404
        assert response.json()["message"] == "Member not found in this project"


class TestProjectStats:
    """Test GET /api/v1/project/{id}/stats."""

    def test_stats(self, client, project, contact):
        pid = project["id"]
        _add_member(client, pid, contact["id"])
        for status in ("TODO", "TODO", "DONE"):
            client.post("/api/v1/task", json={"title": status, "status": status, "projectId": pid})

        response = client.get(f"/api/v1/project/{pid}/stats")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totalTasks"] == 3
        assert data["totalMembers"] == 1
        assert data["tasksByStatus"] == {"TODO": 2, "DONE": 1}

    def test_stats_missing(self, client):
        assert client.get("/api/v1/project/999/stats").status_code == 404
