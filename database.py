# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- A Database object owning the engine and session factory
- Explicit lifecycle: init() on process start, close() on shutdown
- Session dependency for FastAPI routes

Usage:
     from database import get_session

     # In FastAPI routes:
     @router.get("/items")
     def get_items(db: Session = Depends(get_session)):
          return db.query(Item).all()
"""
import logging
from contextlib import contextmanager
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Database:
     """Datastore client shared by every request of one process."""

     def __init__(self, url: str, echo: bool = False, sqlite_foreign_keys: bool = True):
          self.url = url
          self.echo = echo
          self.sqlite_foreign_keys = sqlite_foreign_keys
          self.engine: Optional[Engine] = None
          self.SessionLocal: Optional[sessionmaker] = None

     @property
     def is_initialized(self) -> bool:
          return self.engine is not None

     def init(self) -> None:
          """Create the engine and the session factory (idempotent)."""
          if self.is_initialized:
               return

          if self.url.startswith("sqlite"):
               engine_kwargs = {"connect_args": {"check_same_thread": False}}
               if self.url in ("sqlite://", "sqlite:///:memory:"):
                    # One shared connection, otherwise every checkout sees an empty database
                    engine_kwargs["poolclass"] = StaticPool
               self.engine = create_engine(self.url, echo=self.echo, **engine_kwargs)
               if self.sqlite_foreign_keys:
                    event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
          else:
               self.engine = create_engine(
                    self.url,
                    pool_size=5,
                    max_overflow=10,
                    pool_timeout=30,
                    pool_recycle=1800,  # Recycle connections after 30 minutes
                    pool_pre_ping=True,
                    echo=self.echo,
               )

          self.SessionLocal = sessionmaker(
               bind=self.engine,
               autocommit=False,
               autoflush=False,
               expire_on_commit=False,
          )
          logger.info("Database engine initialised (%s)", self.engine.url.get_backend_name())

     def close(self) -> None:
          """Dispose of pooled connections."""
          if self.engine is not None:
               self.engine.dispose()
               logger.info("Database engine disposed")
          self.engine = None
          self.SessionLocal = None

     def create_all(self) -> None:
          """
          Create tables defined in the models if they don't exist.
          For production, use Alembic migrations instead.
          """
          from models import Base

          self.init()
          Base.metadata.create_all(bind=self.engine)

     def drop_all(self) -> None:
          from models import Base

          self.init()
          Base.metadata.drop_all(bind=self.engine)

     def new_session(self) -> Session:
          if not self.is_initialized:
               raise RuntimeError("Database.init() must be called before opening sessions")
          return self.SessionLocal()

     @contextmanager
     def session_scope(self) -> Generator[Session, None, None]:
          """
          Context manager for database sessions (for use outside FastAPI routes).

          Usage:
               with database.session_scope() as db:
                    users = db.query(User).all()
          """
          session = self.new_session()
          try:
               yield session
               session.commit()
          except Exception:
               session.rollback()
               raise
          finally:
               session.close()

     def check_connection(self) -> bool:
          """
          Test database connectivity.

          Returns:
               bool: True if connection successful, False otherwise
          """
          try:
               self.init()
               with self.engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
               return True
          except Exception:
               logger.exception("Database connection failed")
               return False


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
     cursor = dbapi_connection.cursor()
     cursor.execute("PRAGMA foreign_keys=ON")
     cursor.close()


def get_session(request: Request) -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     The Database instance is attached to the application at startup
     (app.state.database); routers commit their own writes, anything left
     pending is committed here and rolled back on error.

     Yields:
          Session: SQLAlchemy database session
     """
     database: Database = request.app.state.database
     session = database.new_session()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def forget(session: Session, instance) -> None:
     """
     Drop an instance removed by a bulk DELETE from the session.

     DELETE ... RETURNING hands back the row as a persistent object; without
     this, session.get() keeps returning it until the session closes.
     """
     if instance in session:
          session.expunge(instance)
