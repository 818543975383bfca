from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import os

# Use DATABASE_URL env var. Default to sqlite file in the working directory for dev.
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./studiomatic.db')
IN_MEMORY_URLS = ('sqlite://', 'sqlite:///:memory:')

Base = declarative_base()


def make_engine(url: str = DATABASE_URL):
    """Engine for url; an in-memory sqlite url gives one database shared by every session"""
    kwargs = {'pool_pre_ping': True}
    if url.startswith('sqlite'):
        # sessions are used from FastAPI's threadpool
        kwargs['connect_args'] = {'check_same_thread': False}
    if url in IN_MEMORY_URLS:
        # each pooled connection would otherwise open its own empty database
        kwargs['poolclass'] = StaticPool
    return create_engine(url, **kwargs)


def session_dependency(session_factory):
    """FastAPI dependency yielding one session per request from session_factory"""
    def get_session():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()
    return get_session


engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
get_db = session_dependency(SessionLocal)
