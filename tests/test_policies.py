"""
Tests for authorization policies and bearer-token claims.
"""

from uuid import uuid4

import pytest

from fornecedor_api.web.deps import claims_from_payload, require_policy
from fornecedor_api.web.policies import EXCLUIR_FORNECEDOR, Policy, get_policy


class TestPolicy:
    """Tests for policy evaluation."""

    def test_claim_present(self):
        policy = get_policy(EXCLUIR_FORNECEDOR)

        assert policy.evaluate({EXCLUIR_FORNECEDOR: ["true"]}) is True

    def test_claim_value_is_ignored(self):
        """Test only presence matters."""
        policy = Policy(name="p", required_claim="c")

        assert policy.evaluate({"c": [""]}) is True
        assert policy.evaluate({"c": ["false"]}) is True

    def test_claim_absent(self):
        policy = get_policy(EXCLUIR_FORNECEDOR)

        assert policy.evaluate({}) is False
        assert policy.evaluate({"OutraClaim": ["x"]}) is False

    def test_unknown_policy(self):
        with pytest.raises(KeyError):
            get_policy("NaoExiste")

        with pytest.raises(KeyError):
            require_policy("NaoExiste")


class TestClaimsFromPayload:
    """Tests for building UserClaims from a decoded token."""

    def test_builds_claims(self):
        user_id = uuid4()
        payload = {
            "sub": str(user_id),
            "email": "a@b.com",
            "jti": "x",
            "exp": 1,
            EXCLUIR_FORNECEDOR: "true",
            "Multi": ["a", "b"],
            "role": ["Admin"],
        }

        user = claims_from_payload(payload)

        assert user.id == user_id
        assert user.email == "a@b.com"
        assert user.claims == {EXCLUIR_FORNECEDOR: ["true"], "Multi": ["a", "b"]}
        assert user.roles == ["Admin"]
        assert user.has_claim(EXCLUIR_FORNECEDOR)

    def test_missing_subject(self):
        assert claims_from_payload({"email": "a@b.com"}) is None

    def test_malformed_subject(self):
        assert claims_from_payload({"sub": "123", "email": "a@b.com"}) is None
