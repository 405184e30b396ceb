def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def create_route(client, headers):
    r = client.post("/v1/routes", json={"destination_id": 2, "startLat": 40.7610, "startLng": -73.9780}, headers=headers)
    return r.json()["data"]["route_id"]


def test_on_track_notification(client, login):
    john = bearer(login())
    route_id = create_route(client, john)

    r = client.post("/v1/notifications", json={
        "route_id": route_id, "currentLat": 40.7611, "currentLng": -73.9779,
    }, headers=john)

    assert r.status_code == 200
    assert r.json()["message"] == "Notification sent successfully"
    assert r.json()["data"]["type"] == "info"
    assert r.json()["data"]["message"] == "You are on track"


def test_deviation_notification(client, login):
    john = bearer(login())
    route_id = create_route(client, john)

    r = client.post("/v1/notifications", json={
        "route_id": route_id, "currentLat": 40.7700, "currentLng": -73.9700,
    }, headers=john)

    data = r.json()["data"]
    assert data["type"] == "route_deviation"
    assert data["message"].startswith("You have deviated from the route by more than 50 meters")
    assert data["notificationId"] == 1


def test_notification_validation(client, login):
    john = bearer(login())

    r = client.post("/v1/notifications", json={"route_id": 1}, headers=john)
    assert r.status_code == 400
    assert r.json()["message"] == "Missing required fields: currentLat, currentLng"

    r = client.post("/v1/notifications", json={"route_id": 1, "currentLat": 0, "currentLng": 200}, headers=john)
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid current coordinates"

    r = client.post("/v1/notifications", json={"route_id": 77, "currentLat": 0, "currentLng": 0}, headers=john)
    assert r.status_code == 404
    assert r.json()["message"] == "Route not found"


def test_notification_for_foreign_route(client, login):
    route_id = create_route(client, bearer(login("john_smith")))

    r = client.post("/v1/notifications", json={
        "route_id": route_id, "currentLat": 40.7611, "currentLng": -73.9779,
    }, headers=bearer(login("maria_garcia")))

    assert r.status_code == 403


def test_notification_requires_auth(client):
    r = client.post("/v1/notifications", json={"route_id": 1, "currentLat": 0, "currentLng": 0})
    assert r.status_code == 401
