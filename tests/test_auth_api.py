"""
Tests for /registro and /login.
"""

from fornecedor_api.api.auth import INVALID_CREDENTIALS_MESSAGE, LOCKED_OUT_MESSAGE
from fornecedor_api.core.security import decode_access_token
from fornecedor_api.identity.service import IdentityService
from fornecedor_api.web.policies import EXCLUIR_FORNECEDOR
from tests.conftest import DEFAULT_PASSWORD, register


class TestRegistro:
    """Tests for POST /registro."""

    def test_register_returns_token(self, client):
        """Test registration issues a bearer token for the new account."""
        response = client.post(
            "/registro",
            json={"email": "novo@teste.com", "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 120 * 60
        assert body["user_token"]["email"] == "novo@teste.com"
        assert body["user_token"]["claims"] == []

        payload = decode_access_token(body["access_token"])
        assert payload is not None
        assert payload["sub"] == body["user_token"]["id"]
        assert payload["email"] == "novo@teste.com"
        assert payload["jti"]

    def test_register_confirms_email(self, client, db_session):
        """Test accounts are created with the e-mail already confirmed."""
        register(client, "confirmado@teste.com")

        user = IdentityService(db_session).find_by_email("confirmado@teste.com")
        assert user.email_confirmed is True
        assert user.password_hash != DEFAULT_PASSWORD

    def test_register_duplicate_email(self, client):
        """Test a second account with the same e-mail is rejected."""
        register(client, "dup@teste.com")

        response = client.post(
            "/registro",
            json={"email": "DUP@teste.com", "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 400
        codes = [e["code"] for e in response.json()["errors"]]
        assert codes == ["DuplicateEmail"]

    def test_register_weak_password(self, client):
        """Test every password policy violation is reported."""
        response = client.post("/registro", json={"email": "fraca@teste.com", "password": "abc"})

        assert response.status_code == 400
        codes = {e["code"] for e in response.json()["errors"]}
        assert codes == {
            "PasswordTooShort",
            "PasswordRequiresDigit",
            "PasswordRequiresUpper",
            "PasswordRequiresNonAlphanumeric",
        }

    def test_register_invalid_email(self, client):
        """Test a malformed e-mail is a validation problem."""
        response = client.post("/registro", json={"email": "not-an-email", "password": DEFAULT_PASSWORD})

        assert response.status_code == 400
        assert "email" in response.json()["errors"]

    def test_register_missing_password(self, client):
        response = client.post("/registro", json={"email": "semsenha@teste.com"})

        assert response.status_code == 400
        assert "password" in response.json()["errors"]

    def test_register_password_over_hash_limit(self, client):
        """Test a password longer than bcrypt accepts is a validation problem, not a crash."""
        response = client.post("/registro", json={"email": "longa@teste.com", "password": "Aa1!" + "x" * 80})

        assert response.status_code == 400
        assert response.json()["errors"]["password"] == ["A senha pode ter no máximo 72 bytes"]

    def test_register_multibyte_password_over_hash_limit(self, client):
        """Test the limit counts UTF-8 bytes, not characters."""
        response = client.post("/registro", json={"email": "acentos@teste.com", "password": "Aa1!" + "ç" * 40})

        assert response.status_code == 400
        assert "password" in response.json()["errors"]


class TestLogin:
    """Tests for POST /login."""

    def test_login_returns_token(self, client):
        """Test valid credentials return a fresh token."""
        register(client, "login@teste.com")

        response = client.post("/login", json={"email": "login@teste.com", "password": DEFAULT_PASSWORD})

        assert response.status_code == 200
        assert decode_access_token(response.json()["access_token"])["email"] == "login@teste.com"

    def test_login_wrong_password(self, client):
        register(client, "errada@teste.com")

        response = client.post("/login", json={"email": "errada@teste.com", "password": "Outra@123"})

        assert response.status_code == 400
        assert response.json() == {"detail": INVALID_CREDENTIALS_MESSAGE}

    def test_login_unknown_user(self, client):
        """Test an unknown e-mail looks the same as a wrong password."""
        response = client.post("/login", json={"email": "ninguem@teste.com", "password": DEFAULT_PASSWORD})

        assert response.status_code == 400
        assert response.json() == {"detail": INVALID_CREDENTIALS_MESSAGE}

    def test_login_password_over_hash_limit(self, client):
        """Test an over-long password on an existing account is a validation problem."""
        register(client, "limite@teste.com")

        response = client.post("/login", json={"email": "limite@teste.com", "password": "Aa1!" + "x" * 80})

        assert response.status_code == 400
        assert "password" in response.json()["errors"]

    def test_login_invalid_body(self, client):
        response = client.post("/login", json={"email": "", "password": ""})

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"email", "password"}

    def test_login_lockout(self, client):
        """Test repeated failures lock the account, even for the right password."""
        register(client, "bloqueio@teste.com")
        wrong = {"email": "bloqueio@teste.com", "password": "Errada@123"}

        for _ in range(4):
            response = client.post("/login", json=wrong)
            assert response.json() == {"detail": INVALID_CREDENTIALS_MESSAGE}

        response = client.post("/login", json=wrong)
        assert response.status_code == 400
        assert response.json() == {"detail": LOCKED_OUT_MESSAGE}

        response = client.post("/login", json={"email": "bloqueio@teste.com", "password": DEFAULT_PASSWORD})
        assert response.status_code == 400
        assert response.json() == {"detail": LOCKED_OUT_MESSAGE}

    def test_login_token_carries_claims_and_roles(self, client, session_factory):
        """Test user claims and roles are embedded in the issued token."""
        register(client, "claims@teste.com")
        db = session_factory()
        try:
            identity = IdentityService(db)
            identity.add_claim("claims@teste.com", EXCLUIR_FORNECEDOR, "true")
            identity.add_role("claims@teste.com", "Admin")
        finally:
            db.close()

        response = client.post("/login", json={"email": "claims@teste.com", "password": DEFAULT_PASSWORD})

        body = response.json()
        assert {"type": EXCLUIR_FORNECEDOR, "value": "true"} in body["user_token"]["claims"]
        assert {"type": "role", "value": "Admin"} in body["user_token"]["claims"]

        payload = decode_access_token(body["access_token"])
        assert payload[EXCLUIR_FORNECEDOR] == "true"
        assert payload["role"] == ["Admin"]
