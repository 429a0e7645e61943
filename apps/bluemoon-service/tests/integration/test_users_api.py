def _h(user):
    return {"X-Auth-Request-Email": user.email}


def test_register_and_login(client):
    r = client.post("/api/users", json={"name": "Dao Van Tuan", "email": "Tuan@BlueMoon.test", "password": "secret1"})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["email"] == "tuan@bluemoon.test"
    assert body["role"] == "staff"
    assert body["token"]
    assert "password" not in body and "passwordHash" not in body

    r = client.post("/api/users/login", json={"email": "tuan@bluemoon.test", "password": "secret1"})
    assert r.status_code == 200, r.text
    assert r.json()["id"] == body["id"]
    assert r.json()["token"] != body["token"]


def test_register_duplicate_email(client, staff):
    r = client.post("/api/users", json={"name": "Again", "email": staff.email, "password": "secret1"})
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists"


def test_register_short_password(client):
    r = client.post("/api/users", json={"name": "Short", "email": "short@bluemoon.test", "password": "123"})
    assert r.status_code == 400


def test_login_failures(client, user_factory):
    user_factory("manager", email="m@bluemoon.test", password="manager123")
    r = client.post("/api/users/login", json={"email": "m@bluemoon.test", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid email or password"}

    r = client.post("/api/users/login", json={"email": "nobody@bluemoon.test", "password": "manager123"})
    assert r.status_code == 401


def test_profile_uses_identity_header(client, admin, accountant):
    r = client.get("/api/users/profile", headers=_h(accountant))
    assert r.status_code == 200
    assert r.json()["role"] == "accountant"

    # Without the header the first admin is assumed
    r = client.get("/api/users/profile")
    assert r.json()["id"] == str(admin.id)

    r = client.get("/api/users/profile", headers={"X-Auth-Request-Email": "ghost@bluemoon.test"})
    assert r.status_code == 401
    assert r.json() == {"message": "Not authorized"}


def test_list_users_admin_only(client, admin, staff):
    r = client.get("/api/users", headers=_h(admin))
    assert r.status_code == 200
    assert {u["email"] for u in r.json()} == {admin.email, staff.email}

    r = client.get("/api/users", headers=_h(staff))
    assert r.status_code == 403
