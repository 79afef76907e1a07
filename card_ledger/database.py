"""
Database connection and session management.
Uses SQLAlchemy for ORM, sessions and transactions.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for models
Base = declarative_base()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the database engine for the given URL.

    SQLite URLs get a single shared connection per engine; an in-memory
    SQLite database only lives as long as that connection.
    Server databases keep the pooled defaults.
    """
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                database_url,
                echo=echo,
                connect_args=connect_args,
                poolclass=StaticPool,
            )
        return create_engine(database_url, echo=echo, connect_args=connect_args)

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before using
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to an engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Create database tables that do not exist yet."""
    # Register models on Base.metadata
    from card_ledger.models import card  # noqa: F401

    Base.metadata.create_all(bind=engine)
