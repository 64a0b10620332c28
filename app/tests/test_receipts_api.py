# tests/test_receipts_api.py
import re

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.storage import get_store

UUID_RE = re.compile(r"^[0-9a-f-]{36}$")


def _process(client, payload):
    res = client.post("/receipts/process", json=payload)
    assert res.status_code == 200, res.text
    receipt_id = res.json()["id"]
    assert UUID_RE.match(receipt_id)
    return receipt_id

def test_health(client):
    assert client.get("/health").json() == {"ok": True}

def test_process_then_fetch_points(client, target_payload, corner_market_payload):
    target_id = _process(client, target_payload)
    corner_id = _process(client, corner_market_payload)
    assert target_id != corner_id

    assert client.get(f"/receipts/{target_id}/points").json() == {"points": 28}
    assert client.get(f"/receipts/{corner_id}/points").json() == {"points": 109}

def test_same_receipt_twice_gets_new_ids(client, store, corner_market_payload):
    first = _process(client, corner_market_payload)
    second = _process(client, corner_market_payload)
    assert first != second
    assert len(store) == 2

def test_unknown_id_is_404(client):
    res = client.get("/receipts/fake-id/points")
    assert res.status_code == 404
    assert res.json() == {"error": "No receipt found for that id"}

@pytest.mark.parametrize("mutate", [
    lambda p: p.clear(),
    lambda p: p.update(total="-1.23"),
    lambda p: p.update(items=[]),
    lambda p: p["items"][0].update(shortDescription=""),
    lambda p: p.update(purchaseDate="12021-01-01"),
    lambda p: p.update(purchaseTime="123:00"),
])
def test_invalid_receipt_is_400_and_not_stored(client, store, target_payload, mutate):
    mutate(target_payload)
    res = client.post("/receipts/process", json=target_payload)
    assert res.status_code == 400
    errors = res.json()["errors"]
    assert errors
    assert all({"path", "msg", "location"} <= set(e) for e in errors)
    assert len(store) == 0

def test_empty_payload_lists_five_errors(client):
    res = client.post("/receipts/process", json={})
    assert res.status_code == 400
    assert [e["path"] for e in res.json()["errors"]] == [
        "retailer", "total", "items", "purchaseDate", "purchaseTime",
    ]

def test_malformed_json_body_is_400(client, store):
    res = client.post(
        "/receipts/process",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["msg"] == "Request body must be valid JSON"
    assert len(store) == 0

def test_points_too_large_for_sql_store_is_400(sql_store, target_payload):
    app.dependency_overrides[get_store] = lambda: sql_store
    try:
        target_payload["items"][4]["price"] = "9e300"
        res = TestClient(app).post("/receipts/process", json=target_payload)
    finally:
        app.dependency_overrides.clear()
    assert res.status_code == 400
    assert "too large to store" in res.json()["errors"][0]["msg"]
