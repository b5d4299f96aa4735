from unittest.mock import patch

import pytest
from vinheria.core.exceptions import InvalidAccessToken, InvalidCredentials
from vinheria.services.credential_store import credential_store
from vinheria.services.credential_verifier import VerifiedIdentity, credential_verifier

TOKEN = "shared-secret"


@pytest.fixture
def user_id(db):
    return credential_store.register(db, "a@x.com", "pass1")


def test_valid_login_returns_identity(db, user_id):
    identity = credential_verifier.verify_login(db, " A@X.com", "pass1", TOKEN, TOKEN)

    assert identity == VerifiedIdentity(user_id=user_id, email="a@x.com")


def test_wrong_token_rejected_before_user_lookup(db, user_id):
    with patch("vinheria.services.credential_verifier.credential_store") as store:
        with pytest.raises(InvalidAccessToken):
            credential_verifier.verify_login(db, "a@x.com", "pass1", "wrong", TOKEN)
        store.find_by_email.assert_not_called()


@pytest.mark.parametrize("presented", [None, ""])
def test_missing_presented_token_rejected(db, user_id, presented):
    with pytest.raises(InvalidAccessToken):
        credential_verifier.verify_login(db, "a@x.com", "pass1", presented, TOKEN)


@pytest.mark.parametrize("expected", [None, ""])
def test_unconfigured_token_fails_closed(db, user_id, expected):
    # Even an empty presented token must not match an empty configuration
    with pytest.raises(InvalidAccessToken):
        credential_verifier.verify_login(db, "a@x.com", "pass1", expected, expected)


def test_wrong_password_and_unknown_email_look_the_same(db, user_id):
    with pytest.raises(InvalidCredentials) as wrong_password:
        credential_verifier.verify_login(db, "a@x.com", "nope", TOKEN, TOKEN)
    with pytest.raises(InvalidCredentials) as unknown_email:
        credential_verifier.verify_login(db, "b@x.com", "pass1", TOKEN, TOKEN)

    assert wrong_password.value.detail == unknown_email.value.detail
    assert wrong_password.value.status_code == unknown_email.value.status_code


def test_unknown_email_still_runs_a_hash_check(db):
    with patch("vinheria.services.credential_verifier.dummy_verify_password") as dummy:
        with pytest.raises(InvalidCredentials):
            credential_verifier.verify_login(db, "ghost@x.com", "pass1", TOKEN, TOKEN)
    dummy.assert_called_once()


def test_missing_password_is_invalid_credentials(db, user_id):
    with pytest.raises(InvalidCredentials):
        credential_verifier.verify_login(db, "a@x.com", None, TOKEN, TOKEN)


def test_password_with_nul_byte_is_invalid_credentials(db, user_id):
    with pytest.raises(InvalidCredentials):
        credential_verifier.verify_login(db, "a@x.com", "pa\x00ss", TOKEN, TOKEN)
