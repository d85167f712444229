"""Tests for settings loading and derived flags."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.admin_token is None
    assert s.system_api_token is None
    assert s.invitation_expiration_hours == 120
    assert s.mail_enabled is False
    assert s.sso_only_login is False


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("VW_ADMIN_TOKEN", "from-env")
    monkeypatch.setenv("VW_SSO_ENABLED", "true")
    s = Settings(_env_file=None)
    assert s.admin_token == "from-env"
    assert s.sso_enabled is True


def test_domain_trailing_slash_stripped():
    s = Settings(_env_file=None, domain="https://vault.example.com/")
    assert s.domain == "https://vault.example.com"
    assert s.invite_issuer == "https://vault.example.com|invite"


def test_mail_enabled_requires_host_and_sender():
    assert not Settings(_env_file=None, smtp_host="smtp.example.com").mail_enabled
    assert not Settings(_env_file=None, smtp_from="vault@example.com").mail_enabled
    assert Settings(
        _env_file=None, smtp_host="smtp.example.com", smtp_from="vault@example.com"
    ).mail_enabled


def test_sso_only_needs_sso_enabled():
    assert not Settings(_env_file=None, sso_only=True).sso_only_login
    assert Settings(_env_file=None, sso_enabled=True, sso_only=True).sso_only_login


def test_settings_are_immutable():
    s = Settings(_env_file=None)
    with pytest.raises(ValidationError):
        s.admin_token = "changed"


def test_invalid_smtp_security_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, smtp_security="ssl")
