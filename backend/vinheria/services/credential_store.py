import logging
from typing import Optional
from passlib.exc import PasswordValueError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from vinheria.core.exceptions import DuplicateIdentity, InvalidInput, NotFound
from vinheria.core.security import get_password_hash
from vinheria.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    """Canonical form used for storage and lookups"""
    return (email or "").strip().lower()


class CredentialStore:
    """Persists user identities. Identities are append-only."""

    @staticmethod
    def register(db: Session, email: Optional[str], password: Optional[str]) -> int:
        """Create a user and return its id"""
        normalized = normalize_email(email)
        if not normalized:
            raise InvalidInput("Email is required")
        if not password:
            raise InvalidInput("Password is required")

        # Explicit check gives the common case a clean error without
        # paying for a bcrypt hash
        existing = db.query(User.id).filter(User.email == normalized).first()
        if existing:
            raise DuplicateIdentity()

        try:
            password_hash = get_password_hash(password)
        except PasswordValueError:
            # bcrypt rejects NUL bytes and oversized passwords
            raise InvalidInput("Password contains unsupported characters or is too long")

        user = User(email=normalized, password_hash=password_hash)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Two registrations raced past the check above; the unique
            # constraint on users.email is the only thing that can fail here
            db.rollback()
            raise DuplicateIdentity()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user.id

    @staticmethod
    def find_by_email(db: Session, email: Optional[str]) -> User:
        """Look up a user by normalized email"""
        user = db.query(User).filter(User.email == normalize_email(email)).first()
        if user is None:
            raise NotFound("User not found")
        return user


credential_store = CredentialStore()
