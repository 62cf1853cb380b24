# marketplace/data/database.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.domain.errors import Conflict, MarketplaceError, StorageError
from marketplace.utils.logging import get_logger
from marketplace.utils.settings import DATABASE_URL

logger = get_logger(__name__)


def _normalize_url(url: str) -> str:
    # some hosts still hand out the old postgres:// scheme
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(url: str):
    url = _normalize_url(url)
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # in-memory sqlite lives inside a single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(url, **kwargs)

        # sqlite ignores ON DELETE CASCADE unless asked per connection
        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    One unit of work: commit on success, rollback on any error.
    A violated unique constraint surfaces as Conflict, any other database
    failure as StorageError. Nothing is retried.
    """
    try:
        yield db
        db.commit()
    except MarketplaceError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Constraint violated, transaction rolled back: {e.orig}")
        raise Conflict("Duplicate entry") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error, transaction rolled back: {e}")
        raise StorageError("Database error") from e
    except Exception:
        db.rollback()
        raise


def init_db(bind=None) -> None:
    # every model has to be imported before create_all
    import marketplace.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
