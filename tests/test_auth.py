"""Tests for credential checks."""

from fitness_tracker.services.auth import StaticCredentialAuthenticator


def _authenticator() -> StaticCredentialAuthenticator:
    return StaticCredentialAuthenticator(
        username="coach", password="secret", token="token-123"
    )


def test_login_with_matching_credentials_returns_token() -> None:
    assert _authenticator().login("coach", "secret") == "token-123"


def test_login_with_wrong_credentials_returns_none() -> None:
    authenticator = _authenticator()

    assert authenticator.login("coach", "wrong") is None
    assert authenticator.login("someone", "secret") is None
    assert authenticator.login("", "") is None


def test_verify_accepts_only_configured_token() -> None:
    authenticator = _authenticator()

    assert authenticator.verify("token-123")
    assert not authenticator.verify("token-124")
