from conftest import add_message, publish, register


def test_drop_endpoints_require_session(client):
    assert publish(client).status_code == 401
    assert client.get("/drops/mine").status_code == 401
    assert add_message(client, "Bob").status_code == 401
    assert client.delete("/drops/messages", params={"id": 1}).status_code == 401


def test_publish_creates_then_updates(client):
    register(client, "alice")
    created = publish(client, "Hi!")
    assert created.status_code == 201
    body = created.json()
    assert body["username"] == "alice"
    drop_id = body["dropId"]

    updated = publish(client, "Hello again")
    assert updated.status_code == 200
    assert updated.json() == {"dropId": drop_id, "username": "alice"}
    assert client.get("/drops/mine").json()["drop"]["generic_message"] == "Hello again"


def test_publish_requires_generic_message(client):
    register(client, "alice")
    assert publish(client, "   ").status_code == 400
    assert client.post("/drops", json={}).status_code == 400


def test_mine_without_drop(client):
    register(client, "alice")
    response = client.get("/drops/mine")
    assert response.status_code == 200
    assert response.json() == {"drop": None, "messages": [], "views": []}


def test_add_message_before_drop(client):
    register(client, "alice")
    response = add_message(client, "Bob")
    assert response.status_code == 400
    assert response.json() == {"error": "Create a drop first"}


def test_add_message_response_hides_hash(client):
    register(client, "alice")
    publish(client)
    response = add_message(client, " Bob ", hint="Sky")
    assert response.status_code == 201
    body = response.json()
    assert body["nickname"] == "Bob"
    assert body["hint"] == "Sky"
    assert body["content"] == "Surprise!"
    assert "passcode_hash" not in body
    assert "passcode" not in body


def test_add_message_validation_and_conflict(client):
    register(client, "alice")
    publish(client)
    assert add_message(client, "", passcode="x").status_code == 400
    assert add_message(client, "Sunshine").status_code == 201
    duplicate = add_message(client, "sunshine")
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "A message for this nickname already exists"}


def test_mine_lists_messages_and_views_without_hashes(client):
    register(client, "alice")
    publish(client)
    add_message(client, "Bob")
    add_message(client, "Carol", passcode="red")
    client.post("/drop/alice/check", json={"nickname": "carol", "passcode": "RED"})

    body = client.get("/drops/mine").json()
    assert [m["nickname"] for m in body["messages"]] == ["Carol", "Bob"]
    assert [m["view_count"] for m in body["messages"]] == [1, 0]
    assert all("passcode_hash" not in m for m in body["messages"])
    assert len(body["views"]) == 1
    assert body["views"][0]["nickname"] == "carol"
    assert body["views"][0]["message_id"] == body["messages"][0]["id"]


def test_delete_message_by_query_and_path(client):
    register(client, "alice")
    publish(client)
    first = add_message(client, "Bob").json()["id"]
    second = add_message(client, "Carol").json()["id"]

    response = client.delete("/drops/messages", params={"id": first})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = client.delete(f"/drops/messages/{second}")
    assert response.status_code == 200
    assert client.get("/drops/mine").json()["messages"] == []


def test_delete_requires_id(client):
    register(client, "alice")
    publish(client)
    assert client.delete("/drops/messages").status_code == 400
    assert client.delete("/drops/messages", params={"id": "abc"}).status_code == 400
    assert client.delete("/drops/messages/abc").status_code == 400


def test_delete_without_drop(client):
    register(client, "alice")
    response = client.delete("/drops/messages", params={"id": 1})
    assert response.status_code == 404


def test_cannot_delete_someone_elses_message(client, make_client):
    register(client, "alice")
    publish(client)
    message_id = add_message(client, "Bob").json()["id"]

    mallory = make_client()
    register(mallory, "mallory")
    publish(mallory)
    response = mallory.delete("/drops/messages", params={"id": message_id})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert [m["id"] for m in client.get("/drops/mine").json()["messages"]] == [message_id]


def test_delete_rejects_unusable_ids(client):
    register(client, "alice")
    publish(client)
    message_id = add_message(client, "Bob").json()["id"]

    for bad in ["²", "9" * 30, "0", "-1", "1.5"]:
        response = client.delete("/drops/messages", params={"id": bad})
        assert response.status_code == 400, bad
        assert "error" in response.json()

    assert client.delete("/drops/messages/" + "9" * 30).status_code == 400
    assert client.delete("/drops/messages/0").status_code == 400
    assert [m["id"] for m in client.get("/drops/mine").json()["messages"]] == [message_id]
