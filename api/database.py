"""
Database Connection and Session Management

This module handles connections to the relational store and provides
session management for the FastAPI application.

Features:
- Connection pooling
- Per-request sessions injected through FastAPI dependencies
- Health checking
- Automatic table creation
"""

import os
import logging
from datetime import datetime
from typing import Optional, Dict, Any, List
from contextlib import contextmanager

from sqlalchemy import (
    create_engine, inspect, select, insert, text,
    Column, Float, String, Integer, DateTime,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

# Number of readings served by the query endpoint
RECENT_READINGS_LIMIT = 30

# =========================================
# Database Configuration
# =========================================

def get_database_url() -> str:
    """Get database URL from environment."""
    return os.getenv(
        "DATABASE_URL",
        "mysql+pymysql://root:@localhost:3306/sensor_monitor"
    )


def _engine_options(url: str) -> Dict[str, Any]:
    options = {
        "poolclass": QueuePool,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_pre_ping": True,  # Verify connections before use
        "echo": os.getenv("SQL_ECHO", "false").lower() == "true",
    }
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    return options


engine = create_engine(get_database_url(), **_engine_options(get_database_url()))

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


# =========================================
# Tables
# =========================================

class SensorData(Base):
    """One sensor sample reported by the device."""
    __tablename__ = "sensor_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    temperature = Column(Float, nullable=False)
    humidity = Column(Float, nullable=False)
    relay_status = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)


class Threshold(Base):
    """Append-only alert threshold pair; the highest id is current."""
    __tablename__ = "thresholds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    temp_threshold = Column(Float)
    humidity_threshold = Column(Float)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), index=True, nullable=False)
    password = Column(String(255), nullable=False)


# =========================================
# Errors
# =========================================

class StorageError(Exception):
    """
    A write that failed inside the storage layer.

    Attributes:
        stage: "prepare" when no connection could be acquired for the
            statement, "execute" when running or committing it failed
        detail: The underlying database error message
    """

    PREPARE = "prepare"
    EXECUTE = "execute"

    def __init__(self, stage: str, original: Exception):
        self.stage = stage
        self.original = original
        self.detail = str(getattr(original, "orig", None) or original)
        super().__init__(f"{stage} failed: {self.detail}")

    @property
    def message(self) -> str:
        return "Prepare failed" if self.stage == self.PREPARE else "Execution failed"


# =========================================
# Dependency for FastAPI
# =========================================

def get_db():
    """
    Dependency that provides a database session.

    Usage in FastAPI:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return DatabaseManager(db).get_recent_readings()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.

    Usage:
        with get_db_session() as db:
            db.execute(query)
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# =========================================
# Database Operations
# =========================================

class DatabaseManager:
    """
    Manager class for database operations.

    Provides high-level methods for the operations used by the
    API endpoints. Every statement is built with bound parameters.
    """

    def __init__(self, session: Optional[Session] = None):
        """
        Initialize with optional session.

        Args:
            session: SQLAlchemy session (creates new if None)
        """
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> Session:
        """Get or create session."""
        if self._session is None:
            self._session = SessionLocal()
        return self._session

    def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.session.rollback()
        self.close()

    def check_connection(self) -> bool:
        """Check if database connection is working."""
        try:
            self.session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def _execute_write(self, statement):
        try:
            self.session.connection()
        except SQLAlchemyError as e:
            logger.error(f"Failed to prepare statement: {e}")
            raise StorageError(StorageError.PREPARE, e) from e

        try:
            result = self.session.execute(statement)
            self.session.commit()
            return result
        except SQLAlchemyError as e:
            logger.error(f"Failed to execute statement: {e}")
            self.session.rollback()
            raise StorageError(StorageError.EXECUTE, e) from e

    # =========================================
    # Sensor Data Operations
    # =========================================

    def insert_sensor_reading(
        self,
        temperature: float,
        humidity: float,
        relay_status: int,
        timestamp: Optional[datetime] = None
    ) -> datetime:
        """
        Append a sensor reading stamped with the server time.

        Args:
            temperature: Temperature value
            humidity: Humidity value
            relay_status: Relay state (0/1)
            timestamp: Override for the stored time (defaults to now)

        Returns:
            The timestamp that was stored

        Raises:
            StorageError: If the insert could not be prepared or executed
        """
        timestamp = timestamp or datetime.now()
        self._execute_write(
            insert(SensorData.__table__).values(
                temperature=temperature,
                humidity=humidity,
                relay_status=relay_status,
                timestamp=timestamp,
            )
        )
        return timestamp

    def get_recent_readings(self, limit: int = RECENT_READINGS_LIMIT) -> List[Dict[str, Any]]:
        """
        Get the newest readings in chronological order.

        The newest `limit` rows are selected by descending timestamp
        and then reversed, so the oldest of them comes first.

        Raises:
            SQLAlchemyError: If the query cannot be performed
        """
        result = self.session.execute(
            select(
                SensorData.temperature,
                SensorData.humidity,
                SensorData.relay_status,
                SensorData.timestamp,
            )
            .order_by(SensorData.timestamp.desc(), SensorData.id.desc())
            .limit(limit)
        )
        rows = [dict(row._mapping) for row in result]
        rows.reverse()
        return rows

    # =========================================
    # Threshold Operations
    # =========================================

    def get_latest_thresholds(self) -> Optional[Dict[str, Any]]:
        """Get the most recently inserted threshold pair, or None."""
        result = self.session.execute(
            select(Threshold.temp_threshold, Threshold.humidity_threshold)
            .order_by(Threshold.id.desc())
            .limit(1)
        )
        row = result.fetchone()
        if row:
            return dict(row._mapping)
        return None

    def insert_thresholds(self, temp_threshold: float, humidity_threshold: float) -> int:
        """
        Append a threshold pair. Older pairs are kept as history.

        Returns:
            Id of the new row
        """
        result = self._execute_write(
            insert(Threshold.__table__).values(
                temp_threshold=temp_threshold,
                humidity_threshold=humidity_threshold,
            )
        )
        return result.inserted_primary_key[0]

    # =========================================
    # User Operations
    # =========================================

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get id and password hash for an exact email match."""
        result = self.session.execute(
            select(User.id, User.password)
            .where(User.email == email)
            .order_by(User.id)
            .limit(1)
        )
        row = result.fetchone()
        if row:
            return dict(row._mapping)
        return None


# =========================================
# Utility Functions
# =========================================

def check_database_health() -> Dict[str, Any]:
    """
    Check database health and return status.

    Returns:
        Dictionary with health status information
    """
    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))

            existing = set(inspect(db.get_bind()).get_table_names())
            tables = {name: name in existing for name in Base.metadata.tables}

            return {
                "status": "healthy",
                "connected": True,
                "tables": tables
            }

    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "connected": False,
            "error": str(e)
        }


def init_database():
    """
    Create missing tables.

    This is called on application startup to ensure
    the database schema is ready. Existing tables are left untouched.
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables verified")
    except SQLAlchemyError as e:
        logger.error(f"Database initialization failed: {e}")
        raise
