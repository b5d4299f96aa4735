import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session
from vinheria.core.exceptions import InvalidAccessToken, InvalidCredentials, NotFound
from vinheria.core.security import dummy_verify_password, tokens_match, verify_password
from vinheria.services.credential_store import credential_store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifiedIdentity:
    """Who a login or session resolved to. The email is a display copy."""
    user_id: int
    email: str


class CredentialVerifier:
    @staticmethod
    def verify_login(
        db: Session,
        email: Optional[str],
        password: Optional[str],
        presented_token: Optional[str],
        expected_token: Optional[str],
    ) -> VerifiedIdentity:
        """
        Check a login attempt: shared access token first, then password.

        The token is checked before the user table is touched, so a bad
        token reveals nothing about which accounts exist. A missing
        expected token rejects every attempt.
        Unknown email and wrong password raise the same error.
        """
        if not expected_token:
            logger.error("Login rejected: ACCESS_TOKEN is not configured")
            raise InvalidAccessToken()
        if not tokens_match(presented_token, expected_token):
            logger.info("Login rejected: invalid access token")
            raise InvalidAccessToken()

        try:
            user = credential_store.find_by_email(db, email)
        except NotFound:
            # Burn a bcrypt round anyway so response time does not reveal
            # whether the email is registered
            dummy_verify_password()
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentials()

        if not verify_password(password or "", user.password_hash):
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentials()

        return VerifiedIdentity(user_id=user.id, email=user.email)


credential_verifier = CredentialVerifier()
