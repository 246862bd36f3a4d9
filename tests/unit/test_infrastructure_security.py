"""Unit tests for security adapters.

Tests cover:
- BcryptPasswordService: hashing, verification, cost factor bounds
- JWTService: claims, expiry, tampering, secret length
- TokenSessionResolver: token -> Identity, fail-closed on every defect

Architecture:
- Real bcrypt (cost 10) and PyJWT; freezegun for expiry
"""

from datetime import timedelta
from unittest.mock import Mock

import jwt
import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from src.core.result import Failure, Success
from src.domain.enums import UserRole
from src.domain.errors import AuthenticationError
from src.infrastructure.security import (
    BcryptPasswordService,
    JWTService,
    TokenSessionResolver,
)

SECRET = "unit-test-secret-key-with-enough-length-0123"


@pytest.fixture
def token_service() -> JWTService:
    return JWTService(secret_key=SECRET, expiration_minutes=60)


@pytest.fixture
def logger():
    return Mock()


@pytest.fixture
def resolver(token_service, logger) -> TokenSessionResolver:
    return TokenSessionResolver(token_service=token_service, logger=logger)


def _sign(claims: dict) -> str:
    return jwt.encode(claims, SECRET, algorithm="HS256")


@pytest.mark.unit
class TestBcryptPasswordService:
    """Test bcrypt hashing."""

    def test_hash_and_verify(self):
        service = BcryptPasswordService(cost_factor=10)

        password_hash = service.hash_password("SecurePass123!")

        assert password_hash.startswith("$2b$10$")
        assert len(password_hash) == 60
        assert service.verify_password("SecurePass123!", password_hash) is True
        assert service.verify_password("WrongPass123!", password_hash) is False

    def test_hashes_are_salted(self):
        service = BcryptPasswordService(cost_factor=10)

        assert service.hash_password("same") != service.hash_password("same")

    def test_unreadable_hash_verifies_false(self):
        service = BcryptPasswordService(cost_factor=10)

        assert service.verify_password("anything", "not-a-bcrypt-hash") is False

    @pytest.mark.parametrize("cost", [9, 21])
    def test_cost_factor_bounds(self, cost):
        with pytest.raises(ValueError, match="Cost factor"):
            BcryptPasswordService(cost_factor=cost)


@pytest.mark.unit
class TestJWTService:
    """Test session token generation and validation."""

    def test_round_trip_claims(self, token_service):
        user_id = uuid7()

        token = token_service.generate_session_token(
            user_id=user_id, email="ops@example.com", role=UserRole.OPERATOR
        )
        result = token_service.validate_session_token(token)

        assert isinstance(result, Success)
        claims = result.value
        assert claims["sub"] == str(user_id)
        assert claims["email"] == "ops@example.com"
        assert claims["role"] == "OPERATOR"
        assert claims["exp"] - claims["iat"] == 3600
        assert claims["jti"]

    def test_each_token_has_unique_jti(self, token_service):
        user_id = uuid7()
        first = token_service.generate_session_token(
            user_id, "a@example.com", UserRole.VIEWER
        )
        second = token_service.generate_session_token(
            user_id, "a@example.com", UserRole.VIEWER
        )

        first_claims = jwt.decode(first, SECRET, algorithms=["HS256"])
        second_claims = jwt.decode(second, SECRET, algorithms=["HS256"])
        assert first_claims["jti"] != second_claims["jti"]

    def test_expired_token(self, token_service):
        with freeze_time("2026-01-01 12:00:00") as frozen:
            token = token_service.generate_session_token(
                uuid7(), "ops@example.com", UserRole.OPERATOR
            )
            frozen.tick(timedelta(minutes=61))

            result = token_service.validate_session_token(token)

        assert isinstance(result, Failure)
        assert result.error == AuthenticationError.EXPIRED_TOKEN

    def test_wrong_signature(self, token_service):
        other = JWTService(secret_key="another-secret-key-that-is-long-enough-42")
        token = other.generate_session_token(uuid7(), "x@example.com", UserRole.ADMIN)

        result = token_service.validate_session_token(token)

        assert isinstance(result, Failure)
        assert result.error == AuthenticationError.INVALID_TOKEN

    def test_garbage_token(self, token_service):
        result = token_service.validate_session_token("not.a.jwt")

        assert isinstance(result, Failure)
        assert result.error == AuthenticationError.INVALID_TOKEN

    def test_missing_required_claim(self, token_service):
        token = _sign(
            {"sub": str(uuid7()), "email": "x@example.com", "exp": 4102444800, "iat": 0}
        )

        result = token_service.validate_session_token(token)

        assert isinstance(result, Failure)
        assert result.error == AuthenticationError.INVALID_TOKEN

    def test_short_secret_rejected(self):
        with pytest.raises(ValueError, match="at least 32 bytes"):
            JWTService(secret_key="short")

    def test_expiration_seconds(self):
        assert JWTService(secret_key=SECRET).expiration_seconds == 30 * 24 * 60 * 60


@pytest.mark.unit
class TestTokenSessionResolver:
    """Test token -> Identity resolution."""

    async def test_valid_token_resolves(self, token_service, resolver):
        user_id = uuid7()
        token = token_service.generate_session_token(
            user_id, "acc@example.com", UserRole.ACCOUNTANT
        )

        identity = await resolver.resolve(token)

        assert identity is not None
        assert identity.user_id == user_id
        assert identity.email == "acc@example.com"
        assert identity.role is UserRole.ACCOUNTANT

    @pytest.mark.parametrize("token", [None, ""])
    async def test_absent_token(self, resolver, token):
        assert await resolver.resolve(token) is None

    async def test_invalid_token_logs_reason(self, resolver, logger):
        identity = await resolver.resolve("not.a.jwt")

        assert identity is None
        logger.debug.assert_called_once_with(
            "session_token_rejected", reason=AuthenticationError.INVALID_TOKEN
        )

    @pytest.mark.parametrize(
        "claims",
        [
            {"sub": "not-a-uuid", "email": "x@example.com", "role": "ADMIN"},
            {"sub": str(uuid7()), "email": "x@example.com", "role": "ROOT"},
            {"sub": str(uuid7()), "email": "x@example.com", "role": 7},
            {"sub": str(uuid7()), "email": "", "role": "ADMIN"},
        ],
    )
    async def test_malformed_claims_resolve_to_none(self, resolver, claims):
        token = _sign({**claims, "iat": 1767268800, "exp": 4102444800})

        assert await resolver.resolve(token) is None
