def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_empty_sync(client):
    r = client.post("/v1/sync", json=[])

    assert r.status_code == 200
    assert r.json()["message"] == "No operations to synchronize"
    assert r.json()["data"] == {
        "conflicts": [],
        "successful": 0,
        "failed": 0,
        "details": {"successful": [], "failed": []},
    }


def test_non_array_payload(client):
    r = client.post("/v1/sync", json={"operation_type": "rating"})

    assert r.status_code == 400
    assert r.json()["message"] == "Invalid operations payload. Expected an array of operations."


def test_authenticated_sync(client, login):
    operations = [
        {"operation_type": "rating", "exhibit_id": 2, "rating": 5},
        {"operation_type": "unknown", "exhibit_id": 2},
        {"operation_type": "add_favorite", "exhibit_id": 3},
    ]

    r = client.post("/v1/sync", json=operations, headers=bearer(login()))

    assert r.status_code == 200
    data = r.json()["data"]
    assert r.json()["message"] == "Synchronization completed"
    assert data["successful"] == 2
    assert data["failed"] == 1
    assert data["details"]["failed"][0] == {"operation": operations[1], "reason": "Unknown operation type"}

    me = client.get("/v1/auth/me", headers=bearer(login())).json()["data"]
    assert me["favourites"] == [3]


def test_anonymous_sync_fails_per_item(client):
    r = client.post("/v1/sync", json=[{"operation_type": "add_favorite", "exhibit_id": 1}])

    assert r.status_code == 200
    assert r.json()["data"]["failed"] == 1
    assert r.json()["data"]["details"]["failed"][0]["reason"] == "User not found"


def test_invalid_token_is_treated_as_anonymous(client):
    r = client.post("/v1/sync", json=[{"operation_type": "add_favorite", "exhibit_id": 1}], headers=bearer("junk"))

    assert r.status_code == 200
    assert r.json()["data"]["failed"] == 1
