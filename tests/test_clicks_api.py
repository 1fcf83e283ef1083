from datetime import datetime, timezone

from bson import ObjectId


def test_record_click(client, clicks_collection):
    service_id = str(ObjectId())
    response = client.post("/api/clicks", json={"service_id": service_id, "kind": "whatsapp"})

    assert response.status_code == 201
    data = response.json()
    assert data["service_id"] == service_id
    assert data["kind"] == "whatsapp"
    assert data["clicked_at"] is not None
    assert clicks_collection.docs[0]["service_id"] == ObjectId(service_id)


def test_record_click_rejects_malformed_service_id(client, clicks_collection):
    response = client.post("/api/clicks", json={"service_id": "123", "kind": "phone"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid serviceId."
    assert clicks_collection.docs == []


def test_record_click_rejects_unknown_kind(client):
    response = client.post("/api/clicks", json={"service_id": str(ObjectId()), "kind": "email"})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_list_clicks_newest_first_and_filtered(client, clicks_collection):
    first, second = ObjectId(), ObjectId()
    for service_id, day in ((first, 1), (second, 2), (first, 3)):
        clicks_collection.docs.append({
            "_id": ObjectId(),
            "service_id": service_id,
            "kind": "phone",
            "clicked_at": datetime(2024, 5, day, tzinfo=timezone.utc),
        })

    all_clicks = client.get("/api/clicks").json()
    assert [c["clicked_at"][:10] for c in all_clicks] == ["2024-05-03", "2024-05-02", "2024-05-01"]

    filtered = client.get("/api/clicks", params={"service_id": str(first)}).json()
    assert len(filtered) == 2
    assert {c["service_id"] for c in filtered} == {str(first)}


def test_list_clicks_rejects_malformed_filter(client):
    response = client.get("/api/clicks", params={"service_id": "xyz"})
    assert response.status_code == 400
