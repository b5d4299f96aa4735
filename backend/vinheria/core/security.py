import secrets
from datetime import datetime, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordValueError
from vinheria.core.config import settings

# CryptContext handles password hashing using bcrypt
# bcrypt is slow by design to prevent brute-force attacks
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except PasswordValueError:
        # bcrypt refuses some inputs (NUL bytes, oversized); none can match a stored hash
        return False


def dummy_verify_password() -> None:
    """Spend the same time as a real verification when there is no hash to check"""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    # bcrypt generates a salt and embeds it in the hash
    return pwd_context.hash(password)


def tokens_match(presented: Optional[str], expected: Optional[str]) -> bool:
    """Compare two shared secrets using constant-time comparison"""
    if not presented or not expected:
        return False
    return secrets.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def new_session_handle() -> str:
    """Unguessable bearer handle for a session"""
    return secrets.token_urlsafe(32)


def sign_session_handle(handle: str, expires_at: datetime) -> str:
    """Wrap a session handle in a signed cookie value"""
    to_encode = {"sid": handle, "exp": expires_at.astimezone(timezone.utc)}
    return jwt.encode(to_encode, settings.SESSION_SECRET, algorithm=settings.ALGORITHM)


def read_session_handle(cookie_value: Optional[str]) -> Optional[str]:
    """Extract the session handle from a signed cookie value"""
    if not cookie_value:
        return None
    try:
        # Verify signature and expiration automatically
        payload = jwt.decode(cookie_value, settings.SESSION_SECRET,
                             algorithms=[settings.ALGORITHM])
    except JWTError:
        # Tampered, expired or signed with another secret
        return None
    handle = payload.get("sid")
    return handle if isinstance(handle, str) else None
