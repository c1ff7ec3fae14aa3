import uuid

from sqlalchemy import JSON, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.types import TypeDecorator

from shared.core.config import settings

Base = declarative_base()


def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url, connect_args={"check_same_thread": False}
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=30
    )


def build_session_factory(bind):
    # expire_on_commit=False keeps records readable once the unit of work closes
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


engine = build_engine(settings.database_url)
SessionLocal = build_session_factory(engine)


class UUIDList(TypeDecorator):
    """JSON array of UUIDs, stored as strings."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return []
        return [str(item) for item in value]

    def process_result_value(self, value, dialect):
        if not value:
            return []
        return [uuid.UUID(str(item)) for item in value]
