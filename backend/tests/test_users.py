from factoryops.models.enums import UserRole
from conftest import bearer


async def test_create_user_hides_password(client):
    resp = await client.post("/users", json={
        "username": "mnt.sousa", "name": "Rui Sousa", "password": "secret123", "role": "MAINTENANCE",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["username"] == "mnt.sousa"
    assert body["role"] == "MAINTENANCE"
    assert "password" not in body
    assert "passwordHash" not in body

    login = await client.post("/auth/login", json={"username": "mnt.sousa", "password": "secret123"})
    assert login.status_code == 200


async def test_duplicate_username(client, user):
    resp = await client.post("/users", json={
        "username": "op.silva", "name": "Someone Else", "password": "secret123", "role": "OPERATOR",
    })
    assert resp.status_code == 409


async def test_short_password_rejected(client):
    resp = await client.post("/users", json={
        "username": "x", "name": "X", "password": "123", "role": "OPERATOR",
    })
    assert resp.status_code == 422


async def test_list_get_update_delete(client, make_user):
    await make_user(user_id="U1", username="op.silva", name="Joao Silva")
    await make_user(user_id="U2", username="eng.correia", name="Joana Correia", role=UserRole.ENGINEER)

    listed = await client.get("/users")
    assert [u["name"] for u in listed.json()] == ["Joana Correia", "Joao Silva"]

    fetched = await client.get("/users/U1")
    assert fetched.json()["username"] == "op.silva"

    updated = await client.patch("/users/U1", json={"name": "Joao M. Silva", "role": "MAINTENANCE"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Joao M. Silva"
    assert updated.json()["role"] == "MAINTENANCE"
    assert updated.json()["username"] == "op.silva"

    deleted = await client.delete("/users/U1")
    assert deleted.status_code == 200
    assert (await client.get("/users/U1")).status_code == 404


async def test_password_change(client, user):
    resp = await client.patch("/users/U1", json={"password": "newsecret"})
    assert resp.status_code == 200

    old = await client.post("/auth/login", json={"username": "op.silva", "password": "secret123"})
    new = await client.post("/auth/login", json={"username": "op.silva", "password": "newsecret"})
    assert old.status_code == 401
    assert new.status_code == 200


async def test_operator_token_forbidden(client, user):
    resp = await client.get("/users", headers=bearer(user))
    assert resp.status_code == 403


async def test_admin_token_allowed(client, make_user):
    admin = await make_user(user_id="A1", username="admin", name="Admin", role=UserRole.ADMIN)
    resp = await client.get("/users", headers=bearer(admin))
    assert resp.status_code == 200


async def test_anonymous_rejected_when_auth_required(client, settings, monkeypatch):
    monkeypatch.setattr(settings, "require_auth", True)
    resp = await client.get("/users")
    assert resp.status_code == 401


async def test_invalid_token_is_anonymous(client, settings, monkeypatch):
    monkeypatch.setattr(settings, "require_auth", True)
    resp = await client.get("/users", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
