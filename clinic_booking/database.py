from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from .config import settings

_url = settings.resolved_database_url
_connect_args = {"check_same_thread": False} if _url.startswith("sqlite") else {}

# check_same_thread=False is required for SQLite across FastAPI worker threads
engine = create_engine(_url, connect_args=_connect_args)


# Foreign keys are off by default in SQLite
@event.listens_for(engine, "connect")
def enable_sqlite_fk(dbapi_connection, _):
    if not _url.startswith("sqlite"):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


# FastAPI dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
