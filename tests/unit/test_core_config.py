"""Unit tests for Settings validation."""

import pytest
from pydantic import ValidationError

from trip_authz.core.config import Settings
from trip_authz.domain.enums import AuthorizationStrategy

pytestmark = pytest.mark.unit

REQUIRED = {
    "database_url": "sqlite+aiosqlite:///./test.db",
    "policy_service_url": "https://policy.test",
    "policy_service_api_key": "key",
}


class TestSettings:
    """Defaults and validators."""

    def test_defaults(self):
        settings = Settings(**REQUIRED)

        assert settings.authorization_strategy is AuthorizationStrategy.LOCAL
        assert settings.policy_service_timeout_seconds == 5.0
        assert settings.default_organization_id == "default"
        assert settings.reconcile_interval_seconds == 0.0

    def test_strips_trailing_slash(self):
        settings = Settings(**{**REQUIRED, "policy_service_url": "https://policy.test//"})

        assert settings.policy_service_url == "https://policy.test"

    def test_remote_strategy(self):
        settings = Settings(**REQUIRED, authorization_strategy="remote")

        assert settings.authorization_strategy is AuthorizationStrategy.REMOTE

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_rejects_non_positive_timeout(self, timeout):
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, policy_service_timeout_seconds=timeout)

    def test_rejects_negative_interval(self):
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, reconcile_interval_seconds=-1)
