from __future__ import annotations


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "mydiary-api"


def test_user_endpoints(client):
    r = client.post("/api/users", json={"email": "Api@X.com"})
    assert r.status_code == 201
    user = r.json()
    assert user["email"] == "api@x.com"

    assert client.post("/api/users", json={"email": "api@x.com"}).status_code == 409
    assert client.get("/api/users/API@x.com").json()["id"] == user["id"]
    assert client.get("/api/users/missing@x.com").status_code == 404

    again = client.post("/api/users/get-or-create", json={"email": "api@x.com"}).json()
    assert again["id"] == user["id"]

    assert client.delete("/api/users/api@x.com").status_code == 200
    assert client.delete("/api/users/api@x.com").status_code == 404


def test_entry_flow(client):
    user = client.post("/api/users", json={"email": "flow@x.com"}).json()

    r = client.post("/api/entries", json={"owner": user})
    assert r.status_code == 201
    entry = r.json()
    assert entry["is_synced_with_cloud"] is True

    forged = {"id": user["id"] + 50, "email": user["email"]}
    assert client.post("/api/entries", json={"owner": forged}).status_code == 404

    r = client.put(f"/api/entries/{entry['id']}", json={"text": "dear diary"})
    assert r.status_code == 200
    assert r.json()["text"] == "dear diary"
    assert r.json()["is_synced_with_cloud"] is False

    got = client.get(f"/api/entries/{entry['id']}").json()
    assert got["text"] == "dear diary"

    lst = client.get("/api/entries").json()
    assert lst["total"] == 1 and lst["items"][0]["id"] == entry["id"]

    cached = client.get("/api/entries/cached", params={"user_id": user["id"]}).json()["items"]
    assert [e["id"] for e in cached] == [entry["id"]]

    assert client.delete(f"/api/entries/{entry['id']}").status_code == 200
    assert client.get(f"/api/entries/{entry['id']}").status_code == 404
    assert client.delete(f"/api/entries/{entry['id']}").status_code == 404
    assert client.put(f"/api/entries/{entry['id']}", json={"text": "x"}).status_code == 404


def test_delete_all_and_logs(client):
    user = client.post("/api/users", json={"email": "bulk@x.com"}).json()
    for _ in range(3):
        client.post("/api/entries", json={"owner": user})
    r = client.delete("/api/entries")
    assert r.status_code == 200
    assert r.json()["deleted"] == 3
    assert client.get("/api/entries/cached").json()["items"] == []

    logs = client.get("/api/logs/search", params={"action": "CREATE_ENTRY"}).json()
    assert logs["total"] == 3
    assert all(it["result"] == "OK" for it in logs["items"])

    client.post("/api/users", json={"email": "bulk@x.com"})
    errs = client.get("/api/logs/search", params={"action": "CREATE_USER"}).json()["items"]
    assert [it["result"] for it in errs] == ["ERROR", "OK"]
    assert errs[0]["err_msg"] == "UserAlreadyExists"


def test_closed_store_returns_503(client, service):
    user = client.post("/api/users", json={"email": "late@x.com"}).json()
    entry = client.post("/api/entries", json={"owner": user}).json()
    service.close()

    r = client.post("/api/users", json={"email": "p@x.com"})
    assert r.status_code == 503
    assert r.json()["detail"] == "DatabaseNotOpen"
    assert client.post("/api/entries", json={"owner": user}).status_code == 503
    assert client.put(f"/api/entries/{entry['id']}", json={"text": "x"}).status_code == 503
    assert client.delete(f"/api/entries/{entry['id']}").status_code == 503
    assert client.delete("/api/users/late@x.com").status_code == 503
    assert client.get("/api/entries").status_code == 503


def test_request_bodies_do_not_emit_pydantic_deprecations(client):
    import warnings

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        user = client.post("/api/users", json={"email": "warn@x.com"}).json()
        entry = client.post("/api/entries", json={"owner": user}).json()
        client.put(f"/api/entries/{entry['id']}", json={"text": "quiet"})
    names = [type(w.message).__name__ for w in caught]
    assert not [n for n in names if n.startswith("PydanticDeprecated")], names
