"""Unit tests for Settings validation.

Tests cover:
- Required secret key and minimum length
- bcrypt rounds bounds
- Positive limits and durations
- Redirect path normalization
- Environment helpers and unmatched-route policy parsing

Architecture:
- Settings built directly with keyword values (environment defaults from
  tests/conftest.py still apply to unset fields)
"""

import pytest
from pydantic import ValidationError

from src.core.config import Settings
from src.core.enums import Environment
from src.domain.enums import UnmatchedRoutePolicy

SECRET = "config-test-secret-key-long-enough-0123456789"


def _settings(**values) -> Settings:
    values.setdefault("secret_key", SECRET)
    return Settings(_env_file=None, **values)


@pytest.mark.unit
class TestSettingsValidation:
    """Test field validators."""

    def test_short_secret_key_rejected(self):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            _settings(secret_key="short")

    @pytest.mark.parametrize("rounds", [9, 21])
    def test_bcrypt_rounds_bounds(self, rounds):
        with pytest.raises(ValidationError, match="bcrypt_rounds"):
            _settings(bcrypt_rounds=rounds)

    @pytest.mark.parametrize(
        "field",
        [
            "login_max_attempts",
            "login_window_seconds",
            "rate_limit_sweep_interval_seconds",
            "rate_limit_entry_ttl_seconds",
            "session_expire_minutes",
        ],
    )
    def test_limits_must_be_positive(self, field):
        with pytest.raises(ValidationError, match="must be positive"):
            _settings(**{field: 0})

    def test_resolve_timeout_must_be_positive(self):
        with pytest.raises(ValidationError, match="session_resolve_timeout_seconds"):
            _settings(session_resolve_timeout_seconds=0)

    def test_redirect_paths_are_normalized(self):
        settings = _settings(login_path="/signin/", default_landing_path="/")

        assert settings.login_path == "/signin"
        assert settings.default_landing_path == "/"

    def test_relative_redirect_path_rejected(self):
        with pytest.raises(ValidationError, match="must start with '/'"):
            _settings(login_path="login")

    def test_api_base_url_trailing_slash_removed(self):
        assert _settings(api_base_url="https://ops.example.com/").api_base_url == (
            "https://ops.example.com"
        )


@pytest.mark.unit
class TestSettingsDefaults:
    """Test defaults and helpers."""

    def test_gate_defaults(self):
        settings = _settings()

        assert settings.session_cookie_name == "session"
        assert settings.login_max_attempts == 5
        assert settings.login_window_seconds == 900
        assert settings.unmatched_route_policy is UnmatchedRoutePolicy.DENY

    def test_unmatched_policy_parsed_from_string(self):
        settings = _settings(unmatched_route_policy="allow")

        assert settings.unmatched_route_policy is UnmatchedRoutePolicy.ALLOW

    @pytest.mark.parametrize(
        ("environment", "development", "testing", "production"),
        [
            (Environment.DEVELOPMENT, True, False, False),
            (Environment.TESTING, False, True, False),
            (Environment.PRODUCTION, False, False, True),
            (Environment.CI, False, False, False),
        ],
    )
    def test_environment_helpers(self, environment, development, testing, production):
        settings = _settings(environment=environment)

        assert settings.is_development is development
        assert settings.is_testing is testing
        assert settings.is_production is production
