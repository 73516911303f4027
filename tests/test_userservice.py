def test_get_me_hides_secrets(client, signup):
    body, headers = signup()
    res = client.get("/api/users/me", headers=headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == body["user"]["id"]
    assert data["username"] == "alice"
    assert data["email"] == "alice@example.com"
    assert "createdAt" in data and "updatedAt" in data
    assert "passwordHash" not in data and "password_hash" not in data
    assert "mfaSecret" not in data


def test_update_me_changes_profile(client, signup):
    _, headers = signup()
    res = client.put("/api/users/me", headers=headers, json={"username": "alice2", "email": "new@example.com"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["username"] == "alice2"
    assert data["email"] == "new@example.com"

    # new email logs in, the old one no longer does
    ok = client.post("/api/auth/login", json={"email": "new@example.com", "password": "secret1"})
    assert ok.status_code == 200
    old = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret1"})
    assert old.status_code == 400


def test_update_me_with_own_values_is_noop(client, signup):
    _, headers = signup()
    res = client.put("/api/users/me", headers=headers, json={"username": "alice", "email": "alice@example.com"})
    assert res.status_code == 200
    assert res.json()["data"]["username"] == "alice"

    empty = client.put("/api/users/me", headers=headers, json={})
    assert empty.status_code == 200


def test_update_me_rejects_taken_username_and_email(client, signup):
    _, headers = signup("alice")
    signup("bob")

    taken_name = client.put("/api/users/me", headers=headers, json={"username": "bob"})
    assert taken_name.status_code == 400
    assert taken_name.json() == {"success": False, "message": "Username already taken"}

    taken_email = client.put("/api/users/me", headers=headers, json={"email": "bob@example.com"})
    assert taken_email.status_code == 400
    assert taken_email.json()["message"] == "Email already taken"

    me = client.get("/api/users/me", headers=headers).json()["data"]
    assert me["username"] == "alice"
    assert me["email"] == "alice@example.com"


def test_change_password(client, signup):
    _, headers = signup()

    missing = client.put("/api/users/me/password", headers=headers, json={"currentPassword": "secret1"})
    assert missing.status_code == 400
    assert missing.json()["message"] == "Current password and new password are required"

    wrong = client.put("/api/users/me/password", headers=headers, json={"currentPassword": "nope", "newPassword": "secret2"})
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Current password is incorrect"

    ok = client.put("/api/users/me/password", headers=headers, json={"currentPassword": "secret1", "newPassword": "secret2"})
    assert ok.status_code == 200
    assert ok.json() == {"success": True, "message": "Password updated successfully"}

    assert client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret1"}).status_code == 400
    assert client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret2"}).status_code == 200


def test_change_password_validates_new_password_length(client, signup):
    _, headers = signup()
    res = client.put("/api/users/me/password", headers=headers, json={"currentPassword": "secret1", "newPassword": "123"})
    assert res.status_code == 400
    assert res.json()["message"] == "Validation error"


def test_user_routes_require_auth(client):
    assert client.get("/api/users/me").status_code == 401
    assert client.put("/api/users/me", json={"username": "zed"}).status_code == 401
    assert client.put("/api/users/me/password", json={}).status_code == 401


def test_token_for_deleted_user_is_not_found(client, signup, container):
    body, headers = signup()
    # drop the record behind the service's back
    container.auth.user_repo._users.delete(body["user"]["id"])
    res = client.get("/api/users/me", headers=headers)
    assert res.status_code == 404
    assert res.json()["message"] == "User not found"


def test_change_password_rejects_new_password_over_72_bytes(client, signup):
    _, headers = signup()
    res = client.put(
        "/api/users/me/password", headers=headers,
        json={"currentPassword": "secret1", "newPassword": "é" * 40},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Validation error"
    assert any("72 bytes" in e for e in res.json()["errors"])
    # old password still works
    assert client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret1"}).status_code == 200
