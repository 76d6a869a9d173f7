def test_healthz(client):
    r = client.get("/api/v0/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["X-Request-Id"].startswith("req_")


def test_request_id_is_echoed(client):
    r = client.get("/api/v0/healthz", headers={"X-Request-Id": "abc123"})
    assert r.headers["X-Request-Id"] == "abc123"


def test_list_blocks(client):
    r = client.get("/api/v0/blocks")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 4
    assert body["items"][0]["id"] == "block_lead_journey"
    assert body["items"][0]["steps"][1]["trigger"] == {"type": "after_delay", "delay_value": 24, "delay_unit": "hours"}


def test_get_block_not_found(client):
    r = client.get("/api/v0/blocks/nope")
    assert r.status_code == 404
    assert r.json()["detail"] == "Block not found"


def test_create_block(client):
    r = client.post("/api/v0/blocks", json={"name": "Renewals", "type": "custom", "trigger_mode": "manual"})
    assert r.status_code == 201
    block = r.json()
    assert block["type"] == "lead-journey"
    assert block["is_active"] is False
    assert block["allowed_triggers"] == ["manual_only"]
    assert block["steps"][0]["title"] == "Welcome Step"
    assert block["steps"][0]["trigger"]["type"] == "manual_only"

    assert client.get(f"/api/v0/blocks/{block['id']}").status_code == 200
    assert client.get("/api/v0/blocks").json()["total"] == 5


def test_create_block_validation(client):
    assert client.post("/api/v0/blocks", json={"name": ""}).status_code == 422
    assert client.post("/api/v0/blocks", json={"name": "X", "type": "newsletter"}).status_code == 422


def test_update_block_settings(client):
    r = client.patch(
        "/api/v0/blocks/block_reminders",
        json={"name": "Rent Reminders", "allowed_triggers": ["at_datetime", "manual_only"]},
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Rent Reminders"
    assert r.json()["allowed_triggers"] == ["at_datetime", "manual_only"]
    assert r.json()["description"] == "Date and event-based reminder sequences"


def test_toggle_block(client):
    r = client.post("/api/v0/blocks/block_wishes:toggle")
    assert r.status_code == 200
    assert r.json()["is_active"] is False
    assert client.post("/api/v0/blocks/nope:toggle").status_code == 404


def test_run_block_trigger(client):
    client.post("/api/v0/blocks/block_wishes:toggle")
    r = client.post("/api/v0/blocks/block_wishes:run", json={"mode": "series", "frequency": "monthly"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Trigger series scheduled successfully"}
    assert client.get("/api/v0/blocks/block_wishes").json()["is_active"] is True


def test_run_block_trigger_rejects_bad_interval(client):
    r = client.post("/api/v0/blocks/block_wishes:run", json={"mode": "series", "custom_interval": 0})
    assert r.status_code == 422
