# backend/database.py
from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from config import settings
from utils.errors import DatabaseConnectionError

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    # SQLAlchemy expects postgresql://, hosted databases often hand out postgres://
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(url: str = None, echo: bool = None):
    url = normalize_url(url or settings.DATABASE_URL)

    if "sqlite" in url:
        connect_args = {"check_same_thread": False}  # SQLite only
    else:
        connect_args = {}

    return create_engine(
        url,
        connect_args=connect_args,
        echo=settings.SQL_ECHO if echo is None else echo,
    )


_engine = None


def get_engine():
    # Built on first use so a bad DATABASE_URL surfaces at connect time, not import
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


SessionLocal = sessionmaker(autocommit=False, autoflush=False)

Base = declarative_base()


@contextmanager
def get_db():
    db = SessionLocal(bind=get_engine())
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    # Import every model so its table is registered on Base.metadata
    import models.users  # noqa: F401
    import models.catalog  # noqa: F401
    import models.order  # noqa: F401
    import models.tracking  # noqa: F401
    import models.counter  # noqa: F401
    import models.log  # noqa: F401

    Base.metadata.create_all(bind=bind or get_engine())


def connect(bind=None, url: str = None):
    """Open the single session used for the whole terminal run.

    Fails fast with DatabaseConnectionError when the engine cannot be built
    (bad URL, missing driver) or the server cannot be reached, so the caller
    can exit before showing any menu.
    """
    try:
        if bind is None:
            bind = build_engine(url) if url else get_engine()
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
        init_db(bind)
    except (SQLAlchemyError, ImportError) as e:
        target = bind.url if bind is not None else (url or settings.DATABASE_URL)
        logger.error("Unable to connect to database %s: %s", target, e)
        raise DatabaseConnectionError(str(e)) from e

    logger.info("Connected to database %s", bind.url)
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)()
