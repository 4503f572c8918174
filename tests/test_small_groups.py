def test_list_groups_sorted(client, fake_db, auth_headers):
    fake_db.add_group("소망")
    fake_db.add_group("믿음")
    response = client.get("/api/v1/small-groups", headers=auth_headers)
    assert response.status_code == 200
    assert [g["name"] for g in response.json()] == ["믿음", "소망"]


def test_create_strips_name(client, fake_db, admin_headers):
    response = client.post("/api/v1/small-groups", json={"name": "  사랑  "}, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["name"] == "사랑"
    assert fake_db.tables["small_groups"][0]["name"] == "사랑"


def test_blank_name_rejected(client, admin_headers):
    response = client.post("/api/v1/small-groups", json={"name": "   "}, headers=admin_headers)
    assert response.status_code == 422


def test_get_missing_group(client, auth_headers):
    assert client.get("/api/v1/small-groups/missing", headers=auth_headers).status_code == 404


def test_rename(client, fake_db, admin_headers):
    group = fake_db.add_group("믿음")
    response = client.put(f"/api/v1/small-groups/{group['id']}", json={"name": "믿음2"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "믿음2"
    assert client.put("/api/v1/small-groups/missing", json={"name": "x"}, headers=admin_headers).status_code == 404


def test_delete_cascades_to_members(client, fake_db, admin_headers):
    group = fake_db.add_group("믿음")
    member = fake_db.add_member(group["id"], "김민수")
    fake_db.add_request(member["id"], "건강")

    response = client.delete(f"/api/v1/small-groups/{group['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert fake_db.tables["small_groups"] == []
    assert fake_db.tables["members"] == []
    assert fake_db.tables["prayer_requests"] == []
    assert client.delete(f"/api/v1/small-groups/{group['id']}", headers=admin_headers).status_code == 404


def test_store_error_is_500(client, fake_db, auth_headers):
    fake_db.fail_next = True
    response = client.get("/api/v1/small-groups", headers=auth_headers)
    assert response.status_code == 500
    assert "connection refused" in response.json()["detail"]
