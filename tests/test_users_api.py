import pytest

from storefront.repos.user_repo import UserRepo
from tests.conftest import TEST_PASSWORD

REGISTER = {
    "firstName": "John",
    "lastName": "Doe",
    "email": "John@Example.com",
    "password": "password123",
}


class TestRegister:
    def test_register_returns_usable_token(self, client, token_service, db):
        response = client.post("/user/register", json=REGISTER)

        assert response.status_code == 200
        data = response.json()
        assert data["tokenType"] == "bearer"

        claims = token_service.decode(data["accessToken"])
        stored = UserRepo(db).get_user_by_email("john@example.com")
        assert claims["sub"] == stored.id
        assert claims["email"] == "john@example.com"
        assert claims["firstName"] == "John"

    def test_password_is_hashed(self, client, db):
        client.post("/user/register", json=REGISTER)

        stored = UserRepo(db).get_user_by_email("john@example.com")
        assert stored.password_hash != REGISTER["password"]
        assert stored.password_hash.startswith("$argon2")

    def test_duplicate_email(self, client):
        client.post("/user/register", json=REGISTER)

        response = client.post("/user/register", json={**REGISTER, "email": "john@example.com"})

        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"

    @pytest.mark.parametrize("missing", ["firstName", "lastName", "email", "password"])
    def test_missing_field(self, client, missing):
        body = {k: v for k, v in REGISTER.items() if k != missing}

        response = client.post("/user/register", json=body)

        assert response.status_code == 400

    def test_invalid_email(self, client):
        response = client.post("/user/register", json={**REGISTER, "email": "not-an-email"})

        assert response.status_code == 400


class TestLogin:
    def test_login(self, client, user, token_service):
        response = client.post("/user/login", json={"email": user.email, "password": TEST_PASSWORD})

        assert response.status_code == 200
        assert token_service.decode(response.json()["accessToken"])["sub"] == user.id

    def test_wrong_password(self, client, user):
        response = client.post("/user/login", json={"email": user.email, "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Incorrect email or password"

    def test_unknown_email(self, client):
        response = client.post("/user/login", json={"email": "ghost@example.com", "password": TEST_PASSWORD})

        assert response.status_code == 401

    def test_token_from_login_opens_cart(self, client, user):
        token = client.post("/user/login", json={"email": user.email, "password": TEST_PASSWORD}).json()["accessToken"]

        response = client.get("/cart", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["userId"] == user.id
