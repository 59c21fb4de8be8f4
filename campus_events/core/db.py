"""
Database engine, session factory and declarative base
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from campus_events.core.config import settings


def build_database_url(url: str, credential: str | None):
    """Attach the database credential unless the URL already carries one"""
    parsed = make_url(url)
    if credential and parsed.username and not parsed.password:
        parsed = parsed.set(password=credential)
    return parsed


database_url = build_database_url(settings.DATABASE_URL, settings.DATABASE_KEY)
connect_args = {"check_same_thread": False} if database_url.drivername.startswith("sqlite") else {}

engine = create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """Yield one session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
