"""
Database configuration for the SQL-backed order store
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create a SQLAlchemy engine for the given URL"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(bind: Engine) -> None:
    """Create tables that do not exist yet"""
    # Register models on Base.metadata
    from order_management.models import order  # noqa: F401

    Base.metadata.create_all(bind=bind)
