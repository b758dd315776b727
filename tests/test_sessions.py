from bson import ObjectId

from support import API, create, session_payload


def test_unfiltered_list_returns_every_session(client):
    for i in range(3):
        create(client, "session", session_payload(title=f"Session {i}"))
    response = client.get(f"{API}/session")
    assert response.status_code == 200
    assert len(response.json()["data"]) == 3


def test_new_sessions_default_to_pending(client):
    created = create(client, "session", session_payload())
    assert created["status"] == "pending"
    assert "created_at" in created


def test_approved_listings_only_return_approved(client):
    pending = create(client, "session", session_payload())
    approved = create(client, "session", session_payload(status="approved"))
    other_tutor = create(client, "session", session_payload(status="approved", tutor_email="other@x.com"))

    ids = {s["id"] for s in client.get(f"{API}/session/approved").json()["data"]}
    assert ids == {approved["id"], other_tutor["id"]}

    ids = {s["id"] for s in client.get(f"{API}/session/approved/tutor@x.com").json()["data"]}
    assert ids == {approved["id"]}

    ids = {s["id"] for s in client.get(f"{API}/session", params={"status": "pending"}).json()["data"]}
    assert ids == {pending["id"]}


def test_sessions_by_tutor_email(client):
    mine = create(client, "session", session_payload())
    create(client, "session", session_payload(tutor_email="other@x.com"))
    docs = client.get(f"{API}/session/email/tutor@x.com").json()["data"]
    assert [d["id"] for d in docs] == [mine["id"]]


def test_get_session_by_id(client):
    created = create(client, "session", session_payload())
    response = client.get(f"{API}/session/{created['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Linear Algebra Crash Course"


def test_malformed_and_missing_ids(client):
    response = client.get(f"{API}/session/not-an-id")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid session id format"

    missing = str(ObjectId())
    assert client.get(f"{API}/session/{missing}").status_code == 404
    assert client.patch(f"{API}/session/{missing}", json={"registration_fee": 10}).status_code == 404
    assert client.patch(f"{API}/session/approve/{missing}").status_code == 404
    assert client.delete(f"{API}/session/{missing}").status_code == 404
    assert client.patch(f"{API}/session/bad", json={"registration_fee": 10}).status_code == 400
    assert client.delete(f"{API}/session/bad").status_code == 400


def test_approve_session(client, db):
    created = create(client, "session", session_payload())
    response = client.patch(f"{API}/session/approve/{created['id']}")
    assert response.status_code == 200
    assert db["session"].find_one({"_id": ObjectId(created["id"])})["status"] == "approved"


def test_patch_only_touches_supplied_fields(client):
    created = create(client, "session", session_payload(registration_fee=5))
    response = client.patch(f"{API}/session/{created['id']}", json={"registration_fee": 25})
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["registration_fee"] == 25
    assert updated["title"] == created["title"]
    assert updated["tutor_email"] == created["tutor_email"]
    assert "updated_at" in updated


def test_patch_rejects_empty_and_unknown_fields(client):
    created = create(client, "session", session_payload())
    empty = client.patch(f"{API}/session/{created['id']}", json={})
    assert empty.status_code == 400
    assert empty.json()["message"] == "No fields to update"

    unknown = client.patch(f"{API}/session/{created['id']}", json={"_id": "x", "tutor_email": "evil@x.com"})
    assert unknown.status_code == 400
    assert unknown.json()["message"] == "Validation failed"


def test_delete_then_get_is_not_found(client):
    created = create(client, "session", session_payload())
    response = client.delete(f"{API}/session/{created['id']}")
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert client.get(f"{API}/session/{created['id']}").status_code == 404
    assert client.delete(f"{API}/session/{created['id']}").status_code == 404


def test_create_session_validates_body(client):
    response = client.post(f"{API}/session", json={"title": "", "tutor_email": "nope", "registration_fee": -1})
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert {"title", "tutor_email", "registration_fee"} <= fields


def test_patch_rejects_explicit_nulls(client, db):
    created = create(client, "session", session_payload())
    response = client.patch(f"{API}/session/{created['id']}", json={"title": None, "status": None})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"
    stored = db["session"].find_one({"_id": ObjectId(created["id"])})
    assert stored["title"] == created["title"]
    assert stored["status"] == "pending"
