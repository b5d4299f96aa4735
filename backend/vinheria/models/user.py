from sqlalchemy import Column, Integer, String
from vinheria.core.database import Base


class User(Base):
    """
    User model representing registered operators.

    Rows are append-only: nothing in the application updates or deletes them.
    Passwords are stored as hashes (never plaintext).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Stored normalized (trimmed, lower-cased); unique constraint backs the
    # duplicate check done in the credential store
    email = Column(String, unique=True, index=True, nullable=False)
    # bcrypt hash including its salt
    password_hash = Column(String, nullable=False)
