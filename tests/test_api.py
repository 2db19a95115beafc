"""
End-to-end API tests through the FastAPI TestClient.
"""

from datetime import datetime, timedelta, timezone

import pytest

pytestmark = pytest.mark.db


def _iso(delta: timedelta) -> str:
    return (datetime.now(timezone.utc) + delta).isoformat()


def create_team(client, name="Outreach"):
    response = client.post("/admin/teams", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()


def create_question(client, **overrides):
    payload = {
        "question": "Why do you want to help?",
        "short_name": "motivation",
        "question_type": "text",
        "required_by_default": True,
    }
    payload.update(overrides)
    response = client.post("/admin/questions", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_position(client, team_id, **overrides):
    payload = {
        "team_id": team_id,
        "title": "Marketing Monkey",
        "short_description": "Spread the word",
        "general_description": "We are **friendly**",
        "position_description": "Posting",
        "applicant_description": "Enthusiastic",
        "duration": "3 months",
        "time_commitment": "a_few_days",
        "published_at": _iso(-timedelta(days=1)),
        "expires_at": _iso(timedelta(days=30)),
        "contact_emails": ["jobs@example.com"],
    }
    payload.update(overrides)
    response = client.post("/admin/positions", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["api_ok"] is True
    assert body["db_ok"] is True
    assert body["migration_head"] == "0001_initial"
    assert body["schema_current"] is False


def test_question_catalog(client):
    types = client.get("/admin/questions/types").json()
    assert [t["value"] for t in types][:3] == ["date_time", "short_text", "text"]
    assert {"label": "Check Boxes", "value": "check_boxes"} in types

    question = create_question(
        client,
        short_name="shift",
        question_type="select",
        editable_metadata="Morning\n Evening \n\n",
    )
    assert question["metadata"] == ["Morning", "Evening"]
    assert question["editable_metadata"] == "Morning\nEvening"
    assert question["human_question_type"] == "Select"

    response = client.patch(f"/admin/questions/{question['id']}", json={"editable_metadata": ""})
    assert response.status_code == 200
    assert response.json()["metadata"] is None

    assert client.get(f"/admin/questions/{question['id']}").status_code == 200
    assert [q["short_name"] for q in client.get("/admin/questions?question_type=select").json()] == ["shift"]


def test_question_with_unknown_type_is_rejected(client):
    response = client.post(
        "/admin/questions",
        json={"question": "Rate us", "short_name": "rate", "question_type": "slider"},
    )

    assert response.status_code == 422


def test_position_lifecycle(client):
    team = create_team(client)
    position = create_position(client, team["id"])

    assert position["slug"] == "marketing-monkey"
    assert position["status"] == "published"
    assert position["human_status"] == "Published"
    assert position["human_time_commitment"] == "A few days"
    assert position["rendered_general_description"] == "<p>We are <strong>friendly</strong></p>"
    assert position["contact_emails"] == ["jobs@example.com"]

    second = create_position(client, team["id"])
    assert second["slug"] == "marketing-monkey--1"

    response = client.patch("/admin/positions/marketing-monkey--1", json={"title": "Renamed"})
    assert response.status_code == 200
    assert response.json()["slug"] == "marketing-monkey--1"

    draft = create_position(client, team["id"], title="Draft", published_at=None, contact_emails=[])
    assert draft["status"] == "draft"

    listed = client.get("/admin/positions", params={"scope": "unpublished"}).json()
    assert [p["slug"] for p in listed] == ["draft"]
    assert client.get("/admin/positions", params={"scope": "archived"}).status_code == 422

    assert client.get("/positions/draft").status_code == 404
    assert client.get("/admin/positions/draft").status_code == 200
    assert client.get("/positions/marketing-monkey").status_code == 200
    assert [p["slug"] for p in client.get("/positions", params={"q": "renamed"}).json()] == ["marketing-monkey--1"]


def test_invalid_position_returns_field_errors(client):
    team = create_team(client)

    response = client.post(
        "/admin/positions",
        json={
            "team_id": team["id"],
            "title": "Paid gig",
            "paid": True,
            "time_commitment": "forever",
            "published_at": _iso(-timedelta(days=1)),
        },
    )

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "validation_failed"
    fields = error["details"]["fields"]
    assert fields["paid_description"] == ["can't be blank"]
    assert fields["time_commitment"] == ["is not included in the list"]
    assert fields["contact_emails"] == ["can't be blank"]
    assert "duration" in fields


def test_invalid_contact_email_is_rejected(client):
    team = create_team(client)

    response = client.post(
        "/admin/positions",
        json={"team_id": team["id"], "title": "Anything", "contact_emails": ["not-an-email"]},
    )

    assert response.status_code == 422


def test_questions_form_and_application(client, outbox):
    team = create_team(client)
    position = create_position(client, team["id"])
    slug = position["slug"]
    motivation = create_question(client, hint="A sentence or two")
    days = create_question(
        client,
        question="Which days suit you?",
        short_name="days",
        question_type="check_boxes",
        required_by_default=False,
        editable_metadata=["Mon", "Tue"],
    )

    first = client.post(f"/admin/positions/{slug}/questions", json={"question_id": motivation["id"]})
    assert first.status_code == 201, first.text
    assert first.json()["order_position"] == 1
    second = client.post(f"/admin/positions/{slug}/questions", json={"question_id": days["id"], "required": True})
    assert second.json()["order_position"] == 2

    conflict = client.post(
        f"/admin/positions/{slug}/questions",
        json={"question_id": days["id"], "order_position": 2},
    )
    assert conflict.status_code == 409
    assert conflict.json()["error"]["code"] == "order_conflict"

    ordered = client.get(f"/admin/positions/{slug}/questions").json()
    assert [pq["question"]["short_name"] for pq in ordered] == ["motivation", "days"]

    form = client.get(f"/positions/{slug}/form").json()
    assert form[0]["directive"] == {
        "label": "Why do you want to help?",
        "widget": "text",
        "hint": "A sentence or two",
        "required": True,
    }
    assert form[1]["directive"] == {
        "label": "Which days suit you?",
        "widget": "check_boxes",
        "choices": ["Mon", "Tue"],
        "required": True,
    }

    invalid = client.post(
        f"/positions/{slug}/applications",
        json={
            "full_name": "Jane Applicant",
            "email": "jane@example.com",
            "answers": {motivation["id"]: "", days["id"]: ["Sun"]},
        },
    )
    assert invalid.status_code == 422
    assert invalid.json()["error"]["details"]["fields"] == {
        "answers.motivation": ["can't be blank"],
        "answers.days": ["is not included in the list"],
    }
    assert outbox.outbox == []

    submitted = client.post(
        f"/positions/{slug}/applications",
        json={
            "full_name": "Jane Applicant",
            "email": "jane@example.com",
            "phone": "555-0100",
            "answers": {motivation["id"]: "I love it", days["id"]: ["Mon", "Tue"]},
        },
    )
    assert submitted.status_code == 201, submitted.text
    body = submitted.json()
    assert {a["short_name"]: a["value"] for a in body["answers"]} == {
        "motivation": "I love it",
        "days": ["Mon", "Tue"],
    }

    [message] = outbox.outbox
    assert message["Subject"] == "New Position Application Received"
    assert message["To"] == "jobs@example.com"
    assert f"http://admin.test/admin/positions/{slug}" in message.get_body(("plain",)).get_content()

    applications = client.get(f"/admin/positions/{slug}/applications").json()
    assert [a["full_name"] for a in applications] == ["Jane Applicant"]

    report = client.get(f"/admin/positions/{slug}/applications/report.csv", params={"fields": ["full_name", "email"]})
    assert report.status_code == 200
    assert report.headers["content-type"].startswith("text/csv")
    assert report.text.splitlines() == [
        "full_name,email,motivation,days",
        'Jane Applicant,jane@example.com,I love it,"Mon, Tue"',
    ]
    bad_report = client.get(f"/admin/positions/{slug}/applications/report.csv", params={"fields": ["salary"]})
    assert bad_report.status_code == 422


def test_update_and_detach_position_question(client):
    team = create_team(client)
    slug = create_position(client, team["id"])["slug"]
    question = create_question(client)
    attached = client.post(f"/admin/positions/{slug}/questions", json={"question_id": question["id"]}).json()

    response = client.patch(
        f"/admin/positions/{slug}/questions/{attached['id']}",
        json={"required": False, "order_position": 4},
    )
    assert response.status_code == 200
    assert response.json()["order_position"] == 4

    form = client.get(f"/admin/positions/{slug}/form").json()
    assert form[0]["directive"]["required"] is False

    assert client.delete(f"/admin/positions/{slug}/questions/{attached['id']}").status_code == 204
    assert client.delete(f"/admin/positions/{slug}/questions/{attached['id']}").status_code == 404
    assert client.get(f"/admin/positions/{slug}/questions").json() == []


def test_cannot_apply_to_unpublished_position(client):
    team = create_team(client)
    slug = create_position(client, team["id"], published_at=None, contact_emails=[])["slug"]

    response = client.post(
        f"/positions/{slug}/applications",
        json={"full_name": "Jane", "email": "jane@example.com", "answers": {}},
    )

    assert response.status_code == 404


def test_null_required_flag_leaves_question_unchanged(client):
    question = create_question(client, required_by_default=True)

    response = client.patch(f"/admin/questions/{question['id']}", json={"required_by_default": None})

    assert response.status_code == 200, response.text
    assert response.json()["required_by_default"] is True


def test_blank_applicant_name_is_rejected(client, outbox):
    team = create_team(client)
    slug = create_position(client, team["id"])["slug"]

    response = client.post(
        f"/positions/{slug}/applications",
        json={"full_name": "   ", "email": "jane@example.com", "answers": {}},
    )

    assert response.status_code == 422
    assert response.json()["error"]["details"]["fields"] == {"full_name": ["can't be blank"]}
    assert client.get(f"/admin/positions/{slug}/applications").json() == []
    assert outbox.outbox == []
