"""End-to-end tests for the feedback endpoint."""

import logging

from tests.conftest import TEST_USER_ID

PAYLOAD = {
    "name": "Ada",
    "email": "ada@example.com",
    "subject": "Small bug",
    "message": "The save button\nflickers.",
    "type": "complaint",
}


def test_anonymous_feedback_accepted(client, caplog):
    with caplog.at_level(logging.INFO, logger="modules.feedback.service"):
        response = client.post("/api/send-feedback", json=PAYLOAD)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Feedback received"}
    assert "COMPLAINT from Ada" in caplog.text
    assert "anonymous" in caplog.text
    assert response.headers["X-RateLimit-Limit"] == "100"


def test_signed_in_feedback_names_user(client, auth_headers, caplog):
    with caplog.at_level(logging.INFO, logger="modules.feedback.service"):
        response = client.post("/api/send-feedback", json=PAYLOAD, headers=auth_headers)

    assert response.status_code == 200
    assert f"(user {TEST_USER_ID})" in caplog.text


def test_missing_field_rejected(client):
    payload = {key: value for key, value in PAYLOAD.items() if key != "subject"}
    response = client.post("/api/send-feedback", json=payload)
    assert response.status_code == 400
    assert any("subject" in error for error in response.json()["details"])


def test_bad_email_rejected(client):
    response = client.post("/api/send-feedback", json={**PAYLOAD, "email": "not-an-email"})
    assert response.status_code == 400


def test_unknown_type_rejected(client):
    response = client.post("/api/send-feedback", json={**PAYLOAD, "type": "praise"})
    assert response.status_code == 400


def test_get_not_allowed(client):
    assert client.get("/api/send-feedback").status_code == 405
