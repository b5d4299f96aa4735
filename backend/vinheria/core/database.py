from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from vinheria.core.config import settings

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _engine_options(url: str) -> dict:
    """Connection options for the configured backend"""
    if not url.startswith("sqlite"):
        return {}
    # Requests are served from a thread pool, so SQLite connections
    # must be usable outside the thread that opened them
    options = {"connect_args": {"check_same_thread": False}}
    if url in IN_MEMORY_URLS:
        # A single shared connection keeps the in-memory database alive
        options["poolclass"] = StaticPool
    return options


# Create database engine - manages connection pool
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Create session factory - each request gets a new session
# autocommit=False: Changes require explicit commit (prevents accidental commits)
# autoflush=False: Don't auto-flush before queries
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all database models
Base = declarative_base()


def init_db():
    """Create tables that don't exist yet"""
    # Imported for their side effect of registering tables on Base.metadata
    from vinheria.models import product, user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db():
    """
    Dependency for getting database session.

    This is a FastAPI dependency that provides a database session to route handlers.
    The session is automatically closed after the request completes (via finally block).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always close session, even if request raises an exception
        db.close()
