from screentime_api import __version__
from screentime_api.services import store


def _data(resp):
    body = resp.get_json()
    assert body["success"] is True, body
    return body["data"]


def _error(resp):
    body = resp.get_json()
    assert body["success"] is False, body
    return body["error"]


def test_index_reports_version(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_json() == {"version": __version__}


def test_adjustment_type_endpoints(client):
    resp = client.post("/adjustment-types", json={"description": "Chores", "adjustment": 15})
    assert resp.status_code == 201
    created = _data(resp)
    assert created["description"] == "Chores"
    assert created["adjustment"] == 15

    resp = client.get(f"/adjustment-types/{created['id']}")
    assert resp.status_code == 200
    assert _data(resp) == created

    resp = client.get("/adjustment-types")
    assert [x["id"] for x in _data(resp)] == [created["id"]]

    resp = client.delete(f"/adjustment-types/{created['id']}")
    assert resp.status_code == 200
    assert _data(resp) == {"deleted": 1}

    resp = client.get(f"/adjustment-types/{created['id']}")
    assert resp.status_code == 404
    assert _error(resp)["code"] == "NOT_FOUND"


def test_adjustment_type_list_limit(client, types):
    resp = client.get("/adjustment-types?limit=2")
    assert len(_data(resp)) == 2
    assert resp.get_json()["meta"] == {"count": 2, "limit": 2}
    resp = client.get("/adjustment-types?limit=999")
    assert resp.status_code == 422


def test_create_adjustment_type_validation(client):
    resp = client.post("/adjustment-types", json={"description": "Too much", "adjustment": 200})
    assert resp.status_code == 422
    assert _error(resp)["code"] == "VALIDATION_ERROR"

    resp = client.post("/adjustment-types", json={"adjustment": 1})
    assert resp.status_code == 422

    resp = client.post("/adjustment-types", json=[1, 2])
    assert resp.status_code == 422


def test_delete_referenced_adjustment_type_conflicts(client, types, at):
    store.add_adjustment(types[2], created=at(1))
    resp = client.delete(f"/adjustment-types/{types[2].id}")
    assert resp.status_code == 409
    err = _error(resp)
    assert err["code"] == "ADJUSTMENT_TYPE_IN_USE"
    assert str(types[2].id) in err["message"]
    assert store.get_adjustment_type(types[2].id) is not None


def test_delete_missing_adjustment_type(client):
    resp = client.delete("/adjustment-types/42")
    assert resp.status_code == 404


def test_create_and_list_adjustments(client, types):
    resp = client.post("/adjustments", json={
        "type": types[2].id, "comment": "dishes", "created": "2024-01-01T12:01:00",
    })
    assert resp.status_code == 201
    a = _data(resp)
    assert a["adjustment_type_id"] == types[2].id
    assert a["comment"] == "dishes"
    assert a["created"] == "2024-01-01T12:01:00"

    resp = client.post("/adjustments", json={"adjustment_type_id": types[-1].id, "created": "2024-01-01T12:05:00"})
    assert resp.status_code == 201

    rows = _data(client.get("/adjustments"))
    assert [r["adjustment_type_id"] for r in rows] == [types[-1].id, types[2].id]

    rows = _data(client.get(f"/adjustments?type={types[2].id}"))
    assert [r["id"] for r in rows] == [a["id"]]

    rows = _data(client.get("/adjustments?since=2024-01-01T12:05:00"))
    assert len(rows) == 1

    rows = _data(client.get("/adjustments?limit=1"))
    assert len(rows) == 1

    meta = client.get("/adjustments").get_json()["meta"]
    assert meta == {"count": 2, "limit": 10}

    assert _data(client.get(f"/adjustments/{a['id']}"))["id"] == a["id"]


def test_create_adjustment_for_unknown_type(client):
    resp = client.post("/adjustments", json={"type": 77})
    assert resp.status_code == 404
    assert "77" in _error(resp)["message"]


def test_create_adjustment_validation(client, types):
    assert client.post("/adjustments", json={}).status_code == 422
    assert client.post("/adjustments", json={"type": "abc"}).status_code == 422
    assert client.post("/adjustments", json={"type": types[2].id, "created": "soon"}).status_code == 422
    assert client.post("/adjustments", json={"type": types[2].id, "comment": 5}).status_code == 422


def test_list_adjustments_bad_query(client):
    assert client.get("/adjustments?since=nope").status_code == 422
    assert client.get("/adjustments?limit=256").status_code == 422


def test_delete_adjustment(client, types, at):
    a = store.add_adjustment(types[2], created=at(1))
    resp = client.delete(f"/adjustments/{a.id}")
    assert _data(resp) == {"deleted": 1}
    assert client.get(f"/adjustments/{a.id}").status_code == 404
    assert client.delete(f"/adjustments/{a.id}").status_code == 404


def test_time_entry_endpoints(client):
    resp = client.post("/time-entries", json={"time": 90, "created": "2024-01-01T12:00:00"})
    assert resp.status_code == 201
    t = _data(resp)
    assert t["time"] == 90
    assert t["time_formatted"] == "1:30"
    assert t["created"] == "2024-01-01T12:00:00"

    assert _data(client.get(f"/time-entries/{t['id']}")) == t
    assert [x["id"] for x in _data(client.get("/time-entries"))] == [t["id"]]
    assert client.get("/time-entries?limit=0").get_json()["meta"] == {"count": 0, "limit": 0}

    assert _data(client.delete(f"/time-entries/{t['id']}")) == {"deleted": 1}
    assert client.get(f"/time-entries/{t['id']}").status_code == 404
    assert client.delete(f"/time-entries/{t['id']}").status_code == 404


def test_create_time_entry_validation(client):
    assert client.post("/time-entries", json={}).status_code == 422
    assert client.post("/time-entries", json={"time": -5}).status_code == 422
    assert client.post("/time-entries", json={"time": 70000}).status_code == 422


def test_adjusted_time_endpoint(client, types):
    resp = client.get("/time")
    assert _data(resp) == {"time": 0, "formatted_time": "0:00"}

    client.post("/time-entries", json={"time": 120, "created": "2024-01-01T12:00:00"})
    client.post("/adjustments", json={"type": types[-1].id, "created": "2024-01-01T12:01:00"})
    client.post("/adjustments", json={"type": types[3].id, "created": "2024-01-01T12:02:00"})
    assert _data(client.get("/time")) == {"time": 122, "formatted_time": "2:02"}


def test_adjusted_time_overflow_is_a_server_error(client, at):
    big = store.add_adjustment_type("huge", 127)
    store.add_time_entry(65535, created=at(0))
    store.add_adjustment(big, created=at(1))
    resp = client.get("/time")
    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
