"""
Unit tests for settings parsing.
"""

import pytest

from smartflow.config import DEVELOPMENT_JWT_SECRET, Settings


class TestSettings:

    def test_cors_origins_from_comma_separated_string(self):
        settings = Settings(cors_origins="https://app.example.com, https://admin.example.com")

        assert settings.cors_origins == ["https://app.example.com", "https://admin.example.com"]

    def test_environment_helpers(self):
        assert Settings(environment="Testing").is_testing
        assert Settings(environment="production").is_production
        assert not Settings(environment="production").is_development

    def test_production_rejects_development_secret(self):
        settings = Settings(environment="production", jwt_secret_key=DEVELOPMENT_JWT_SECRET)

        with pytest.raises(ValueError, match="JWT_SECRET_KEY must be changed"):
            settings.validate_environment()

    def test_entry_locking_defaults_on(self):
        assert Settings().lock_submitted_time_entries is True
