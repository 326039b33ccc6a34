# product_api/db.py

"""
Database configuration and session management for the Product API.

The store handle is owned by the application: `create_app` builds a
`Database`, opens it on startup and closes it on shutdown. Request handlers
receive a session through the `get_db` dependency.
"""
import logging
import os
import time

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Read DB settings from environment variables, with defaults for local/dev
POSTGRES_USER = os.getenv("POSTGRES_USER", "postgres")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
POSTGRES_DB = os.getenv("POSTGRES_DB", "postgres")
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")

# A full connection string wins over the individual settings
DATABASE_URL = os.getenv("DATABASE_URL") or os.getenv("DB_URL") or (
    "postgresql://"
    f"{POSTGRES_USER}:{POSTGRES_PASSWORD}@"
    f"{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
)

DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", "5"))
DB_CONNECT_RETRY_DELAY = float(os.getenv("DB_CONNECT_RETRY_DELAY", "3"))

# Base class for the ORM models
Base = declarative_base()


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one application.

    `open()` ensures the tables exist and never raises on connectivity
    failure: the error is logged and the app keeps serving in degraded mode,
    with requests failing downstream until the store comes back.
    """

    def __init__(
        self,
        url: str = DATABASE_URL,
        retries: int = DB_CONNECT_RETRIES,
        retry_delay: float = DB_CONNECT_RETRY_DELAY,
        **engine_kwargs,
    ):
        self.url = url
        self.retries = max(retries, 1)
        self.retry_delay = retry_delay
        if url.startswith("sqlite"):
            # SQLite connections are handed across TestClient/uvicorn threads
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        # pool_pre_ping=True helps maintain healthy connections in a pool
        self.engine = create_engine(url, pool_pre_ping=True, **engine_kwargs)
        # autocommit/autoflush off: changes are committed explicitly by handlers
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )
        self.connected = False

    def open(self) -> bool:
        """Create the tables, retrying while the store is unreachable."""
        for i in range(self.retries):
            try:
                logger.info(
                    f"Attempting to connect to the database and create tables (attempt {i+1}/{self.retries})..."
                )
                Base.metadata.create_all(bind=self.engine)
                logger.info("Successfully connected to the database and ensured tables exist.")
                self.connected = True
                return True
            except OperationalError as e:
                logger.warning(f"Failed to connect to the database: {e}")
                if i < self.retries - 1:
                    logger.info(f"Retrying in {self.retry_delay} seconds...")
                    time.sleep(self.retry_delay)
        logger.error(
            f"Error al conectar a la base de datos después de {self.retries} intentos. "
            "Serving requests in degraded mode."
        )
        self.connected = False
        return False

    def close(self) -> None:
        """Release every pooled connection."""
        self.engine.dispose()
        self.connected = False
        logger.info("Database connections closed.")

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False


def get_db(request: Request):
    """
    Dependency to provide a new database session for FastAPI endpoints.
    A session is created for each request and automatically closed after use.
    """
    db = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()
