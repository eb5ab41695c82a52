import functools

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from fornecedor_api.core.config import get_settings

Base = declarative_base()


@functools.lru_cache()
def get_engine():
    """Engine for DATABASE_URL, built on first use and shared by the app and the CLI."""
    settings = get_settings()
    connect_args = {}
    if settings.DATABASE_URL.startswith("sqlite"):
        # Route handlers run in the threadpool, not on the thread that opened the connection
        connect_args["check_same_thread"] = False
    return create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,
        echo=False,
        connect_args=connect_args,
    )


@functools.lru_cache()
def get_sessionmaker():
    # autoflush off: commit_unit_of_work counts pending objects before flushing
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db():
    """Request-scoped session. One session is one unit of work: handlers commit at most once."""
    SessionLocal = get_sessionmaker()
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create every table known to the declarative Base."""
    # Import models so they register on Base.metadata
    import fornecedor_api.models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
