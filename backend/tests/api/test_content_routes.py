"""Tests for the content library endpoint."""

import json

import pytest

from tests.conftest import TEST_USER_ID

SAVE_PAYLOAD = {
    "title": "Walking in Grace",
    "content": "# Walking in Grace\n\n## INTRODUCTION\nHello",
    "content_type": "sermon",
    "topic": "Grace",
}


def save(client, headers, **overrides):
    return client.post("/api/save-content", json={**SAVE_PAYLOAD, **overrides}, headers=headers)


class TestSaveContent:
    def test_save(self, client, auth_headers):
        response = save(client, auth_headers, structured_data=json.dumps({"points": 2}))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Content saved to library"
        assert body["data"]["user_id"] == TEST_USER_ID
        assert body["data"]["bible_verse"] == ""
        assert body["data"]["structured_data"] == {"points": 2}

    def test_undeclared_field_rejects_whole_payload(self, client, auth_headers, content_service):
        """Scenario D: an extra field fails the request even with valid known fields."""
        response = save(client, auth_headers, isAdmin=True)

        assert response.status_code == 400
        assert "isAdmin" in response.json()["details"][0]

    @pytest.mark.asyncio
    async def test_rejected_save_writes_nothing(self, client, auth_headers, content_service):
        save(client, auth_headers, isAdmin=True)
        assert await content_service.list(TEST_USER_ID) == []

    def test_script_is_stripped_from_content(self, client, auth_headers):
        response = save(client, auth_headers, content="Body<script>alert(1)</script>")
        assert response.json()["data"]["content"] == "Body"

    def test_invalid_structured_data(self, client, auth_headers):
        response = save(client, auth_headers, structured_data="{oops")
        assert response.status_code == 400

    def test_requires_auth(self, client):
        assert client.post("/api/save-content", json=SAVE_PAYLOAD).status_code == 401

    def test_patch_not_allowed(self, client, auth_headers):
        response = client.patch("/api/save-content", json=SAVE_PAYLOAD, headers=auth_headers)
        assert response.status_code == 405
        assert response.headers["Allow"] == "POST, PUT, DELETE, GET"


class TestListContent:
    def test_lists_own_rows(self, client, auth_headers, other_headers):
        save(client, auth_headers)
        save(client, other_headers, title="Someone else's")

        response = client.get("/api/save-content", headers=auth_headers)

        assert response.status_code == 200
        rows = response.json()["data"]
        assert [row["title"] for row in rows] == ["Walking in Grace"]

    def test_filter_by_type(self, client, auth_headers):
        save(client, auth_headers)
        save(client, auth_headers, title="Study", content_type="study")

        response = client.get("/api/save-content?content_type=study", headers=auth_headers)

        assert [row["title"] for row in response.json()["data"]] == ["Study"]

    def test_unknown_query_parameter(self, client, auth_headers):
        response = client.get("/api/save-content?owner=everyone", headers=auth_headers)
        assert response.status_code == 400


class TestUpdateContent:
    def test_update(self, client, auth_headers):
        content_id = save(client, auth_headers).json()["data"]["id"]

        response = client.put(
            "/api/save-content", json={"id": content_id, "title": "Renamed"}, headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["title"] == "Renamed"
        assert response.json()["data"]["topic"] == "Grace"

    def test_update_other_users_row(self, client, auth_headers, other_headers):
        content_id = save(client, auth_headers).json()["data"]["id"]

        response = client.put(
            "/api/save-content", json={"id": content_id, "title": "Stolen"}, headers=other_headers,
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Content not found"

    def test_update_requires_uuid(self, client, auth_headers):
        response = client.put("/api/save-content", json={"id": "1; drop table"}, headers=auth_headers)
        assert response.status_code == 400


class TestDeleteContent:
    def test_delete(self, client, auth_headers):
        content_id = save(client, auth_headers).json()["data"]["id"]

        response = client.delete(f"/api/save-content?id={content_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Content deleted"}
        assert client.get("/api/save-content", headers=auth_headers).json()["data"] == []

    def test_delete_other_users_row(self, client, auth_headers, other_headers):
        content_id = save(client, auth_headers).json()["data"]["id"]

        response = client.delete(f"/api/save-content?id={content_id}", headers=other_headers)

        assert response.status_code == 404
        assert len(client.get("/api/save-content", headers=auth_headers).json()["data"]) == 1

    def test_delete_requires_id(self, client, auth_headers):
        response = client.delete("/api/save-content", headers=auth_headers)
        assert response.status_code == 400
        assert "id is required" in response.json()["details"]
