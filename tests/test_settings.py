"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from account_rules.core.settings import Settings


def test_free_tier_defaults():
    settings = Settings(environment="test")

    assert settings.requires_subscription is False
    assert settings.number_of_allowed_contacts_free_account == 10
    assert settings.is_testing


def test_negative_contact_limit_is_rejected():
    with pytest.raises(ValidationError):
        Settings(environment="test", number_of_allowed_contacts_free_account=-1)


def test_log_level_is_normalized():
    assert Settings(environment="test", log_level="debug").log_level == "DEBUG"


def test_unknown_environment_is_rejected():
    with pytest.raises(ValidationError):
        Settings(environment="qa")
