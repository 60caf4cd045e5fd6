"""
Tests for signup, login and the current-user endpoint.
"""
from jobhunt.core.security import hash_password, verify_password


def test_signup_success(client):
    response = client.post(
        "/auth/signup",
        json={"email": "New.User@Example.com", "password": "testpass123", "full_name": "New User"}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User created successfully"
    assert data["user_id"] > 0


def test_signup_duplicate_email(client, test_user):
    response = client.post(
        "/auth/signup",
        json={"email": "TEST@example.com", "password": "testpass123"}
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


def test_signup_validation(client):
    assert client.post("/auth/signup", json={"email": "nope", "password": "testpass123"}).status_code == 422
    assert client.post("/auth/signup", json={"email": "a@b.co", "password": "123"}).status_code == 422


def test_login_success(client, test_user):
    response = client.post(
        "/auth/login",
        data={"username": "test@example.com", "password": "testpass123"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]


def test_login_wrong_password(client, test_user):
    response = client.post(
        "/auth/login",
        data={"username": "test@example.com", "password": "wrongpass"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_login_unknown_user(client):
    response = client.post(
        "/auth/login",
        data={"username": "ghost@example.com", "password": "testpass123"}
    )

    assert response.status_code == 401


def test_signup_then_login_then_me(client):
    client.post("/auth/signup", json={"email": "flow@example.com", "password": "testpass123"})
    token = client.post(
        "/auth/login",
        data={"username": "flow@example.com", "password": "testpass123"}
    ).json()["access_token"]

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["email"] == "flow@example.com"


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401


def test_password_hashing_roundtrip():
    hashed = hash_password("testpass123")

    assert hashed != "testpass123"
    assert verify_password("testpass123", hashed)
    assert not verify_password("wrongpass", hashed)
