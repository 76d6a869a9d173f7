def test_selection_defaults_to_nothing(client):
    r = client.get("/api/v0/selection")
    assert r.status_code == 200
    assert r.json() == {"selection": {"block_id": None, "step_id": None}, "block": None, "step": None}


def test_put_selection(client):
    r = client.put("/api/v0/selection", json={"block_id": "block_wishes", "step_id": "step_ws_2"})
    assert r.status_code == 200
    body = r.json()
    assert body["block"]["id"] == "block_wishes"
    assert body["step"]["title"] == "Move-in Anniversary"


def test_selecting_block_clears_step(client):
    client.put("/api/v0/selection", json={"block_id": "block_wishes", "step_id": "step_ws_2"})
    body = client.put("/api/v0/selection", json={"block_id": "block_reminders"}).json()
    assert body["selection"] == {"block_id": "block_reminders", "step_id": None}
    assert body["step"] is None


def test_activity_feed(client):
    r = client.get("/api/v0/activity")
    assert r.status_code == 200
    assert [e["id"] for e in r.json()["items"]] == ["act_1", "act_2", "act_3", "act_4"]

    client.post("/api/v0/blocks/block_wishes:toggle")
    items = client.get("/api/v0/activity", params={"limit": 2}).json()["items"]
    assert len(items) == 2
    assert items[0]["action"] == "Block paused"
    assert items[0]["icon"] == "Pause"


def test_activity_limit_is_clamped(client):
    body = client.get("/api/v0/activity", params={"limit": 500}).json()
    assert body["limit"] == 20
    body = client.get("/api/v0/activity", params={"limit": 0}).json()
    assert body["limit"] == 1
    assert len(body["items"]) == 1


def test_catalog(client):
    triggers = client.get("/api/v0/catalog/triggers").json()["items"]
    assert [t["type"] for t in triggers][0] == "on_entry"
    types = {t["type"] for t in client.get("/api/v0/catalog/block-types").json()["items"]}
    assert types == {"lead-journey", "community-message", "reminders", "wishes"}
    assert "{{first_name}}" in client.get("/api/v0/catalog/merge-tokens").json()["items"]
