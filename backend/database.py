# backend/database.py
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    # Configuration depends on the database backend
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}  # SQLite only
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory database has to be shared by every session
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, connect_args=connect_args)

    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# The engine and session factory are created once in main.create_app and
# stored on app.state; every request gets its own session from there.
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
