"""
Tests for HS512 token issuance and validation.
"""

from __future__ import annotations

import time

import jwt as pyjwt
import pytest

from auth.jwt import TokenService
from core.errors import TokenExpired, TokenInvalid, TokenValidationFailure

SECRET = "jwt-test-secret-0123456789abcdef0123456789abcdef0123456789abcdef"


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(SECRET)


def _make_token(
    exp: int | None = None,
    secret: str = SECRET,
    algorithm: str = "HS512",
    **claims: object,
) -> str:
    """Hand-build a token with the service's claim layout."""
    payload: dict[str, object] = {
        "id": 1,
        "username": "alice",
        "exp": exp or int(time.time()) + 3600,
        **claims,
    }
    return pyjwt.encode(payload, secret, algorithm=algorithm)


class TestIssue:
    def test_round_trip(self, token_service):
        issued_at = int(time.time())
        claims = token_service.validate(token_service.issue(42, "alice"))

        assert claims.subject_id == 42
        assert claims.username == "alice"
        assert claims.exp > issued_at

    def test_expiry_is_one_hour(self, token_service):
        issued_at = int(time.time())
        claims = token_service.validate(token_service.issue(1, "bob"))
        assert issued_at + 3600 <= claims.exp <= int(time.time()) + 3600

    def test_header_uses_hs512(self, token_service):
        token = token_service.issue(1, "bob")
        assert pyjwt.get_unverified_header(token)["alg"] == "HS512"

    def test_payload_layout(self, token_service):
        token = token_service.issue(7, "carol")
        payload = pyjwt.decode(token, SECRET, algorithms=["HS512"])
        assert payload["id"] == 7
        assert payload["username"] == "carol"
        assert isinstance(payload["exp"], int)

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestValidate:
    def test_hand_built_token_accepted(self, token_service):
        claims = token_service.validate(_make_token(id=5, username="dave"))
        assert claims.subject_id == 5
        assert claims.username == "dave"

    def test_past_expiry_is_expired_not_invalid(self, token_service):
        token = _make_token(exp=int(time.time()) - 60)
        with pytest.raises(TokenExpired):
            token_service.validate(token)

    def test_expired_is_a_validation_failure(self, token_service):
        token = _make_token(exp=int(time.time()) - 60)
        with pytest.raises(TokenValidationFailure):
            token_service.validate(token)

    def test_wrong_secret_invalid(self, token_service):
        token = _make_token(secret="another-secret-another-secret-another-secret-another-secret-xx")
        with pytest.raises(TokenInvalid):
            token_service.validate(token)

    def test_other_algorithm_invalid(self, token_service):
        token = _make_token(algorithm="HS256")
        with pytest.raises(TokenInvalid):
            token_service.validate(token)

    def test_unsigned_token_invalid(self, token_service):
        token = pyjwt.encode(
            {"id": 1, "username": "alice", "exp": int(time.time()) + 3600},
            None,
            algorithm="none",
        )
        with pytest.raises(TokenInvalid):
            token_service.validate(token)

    def test_missing_exp_invalid(self, token_service):
        token = pyjwt.encode({"id": 1, "username": "alice"}, SECRET, algorithm="HS512")
        with pytest.raises(TokenInvalid):
            token_service.validate(token)

    def test_missing_id_invalid(self, token_service):
        token = pyjwt.encode(
            {"username": "alice", "exp": int(time.time()) + 3600},
            SECRET,
            algorithm="HS512",
        )
        with pytest.raises(TokenInvalid):
            token_service.validate(token)

    def test_garbage_invalid(self, token_service):
        with pytest.raises(TokenInvalid):
            token_service.validate("not.a.jwt")
