# pokeguess/db_helpers.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pokeguess.config import DB_PATH, logger
from pokeguess.entities import Base


def get_db_engine(db_path: str = DB_PATH):
    url = f"sqlite+pysqlite:///{db_path}"
    logger.info(f"[DB] Using SQLite file: {url}")
    return create_engine(
        url,
        connect_args={"check_same_thread": False, "timeout": 10},
    )


def init_database(db_path: str = DB_PATH) -> sessionmaker:
    """
    Open (or create) the cache database and return a session factory.
    Any error here is fatal for the process, callers should not swallow it.
    """
    engine = get_db_engine(db_path)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
