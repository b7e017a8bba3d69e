"""
Tests for the Database Manager

Run with: pytest tests/test_database.py -v
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from api.database import DatabaseManager, StorageError, User


class TestStorageError:
    """Test StorageError messages."""

    def test_prepare_message(self):
        error = StorageError(StorageError.PREPARE, Exception("no connection"))

        assert error.message == "Prepare failed"
        assert error.detail == "no connection"

    def test_execute_message_uses_driver_error(self):
        original = OperationalError("INSERT", {}, Exception("Table is read only"))
        error = StorageError(StorageError.EXECUTE, original)

        assert error.message == "Execution failed"
        assert error.detail == "Table is read only"


class TestSensorReadings:
    """Test reading storage and retrieval."""

    @pytest.fixture(autouse=True)
    def manager(self, session_factory):
        self.session = session_factory()
        self.db = DatabaseManager(self.session)
        yield
        self.session.close()

    def test_insert_uses_server_time(self):
        before = datetime.now()
        stored = self.db.insert_sensor_reading(22.0, 55.0, 1)

        assert stored >= before
        rows = self.db.get_recent_readings()
        assert len(rows) == 1
        assert rows[0]["timestamp"] == stored

    def test_recent_readings_limit_and_order(self):
        start = datetime(2024, 1, 1, 12, 0, 0)
        for i in reversed(range(5)):
            self.db.insert_sensor_reading(float(i), 40.0, 0, timestamp=start + timedelta(seconds=i))

        rows = self.db.get_recent_readings(limit=3)

        assert [r["temperature"] for r in rows] == [2.0, 3.0, 4.0]

    def test_same_timestamp_keeps_insert_order(self):
        moment = datetime(2024, 1, 1, 12, 0, 0)
        self.db.insert_sensor_reading(1.0, 40.0, 0, timestamp=moment)
        self.db.insert_sensor_reading(2.0, 40.0, 1, timestamp=moment)

        rows = self.db.get_recent_readings()

        assert [r["temperature"] for r in rows] == [1.0, 2.0]

    def test_check_connection(self):
        assert self.db.check_connection()


class TestThresholdStorage:
    """Test the append-only threshold table."""

    @pytest.fixture(autouse=True)
    def manager(self, session_factory):
        self.session = session_factory()
        self.db = DatabaseManager(self.session)
        yield
        self.session.close()

    def test_empty_table(self):
        assert self.db.get_latest_thresholds() is None

    def test_ids_increase_and_latest_wins(self):
        first = self.db.insert_thresholds(25.0, 60.0)
        second = self.db.insert_thresholds(27.0, 65.0)

        assert second > first
        assert self.db.get_latest_thresholds() == {
            "temp_threshold": 27.0,
            "humidity_threshold": 65.0
        }


class TestUserLookup:
    """Test user lookup by email."""

    @pytest.fixture(autouse=True)
    def manager(self, session_factory):
        self.session = session_factory()
        self.db = DatabaseManager(self.session)
        yield
        self.session.close()

    def test_unknown_email(self):
        assert self.db.get_user_by_email("nobody@example.com") is None

    def test_exact_match_only(self):
        self.session.add(User(email="Carol@example.com", password="x"))
        self.session.commit()

        assert self.db.get_user_by_email("carol@example.co") is None

    def test_duplicate_email_returns_first(self):
        first = User(email="dup@example.com", password="first")
        second = User(email="dup@example.com", password="second")
        self.session.add_all([first, second])
        self.session.commit()

        user = self.db.get_user_by_email("dup@example.com")

        assert user == {"id": first.id, "password": "first"}


class TestWriteFailures:
    """Test prepare/execute staging with a mocked session."""

    def test_prepare_failure_skips_execute(self):
        session = MagicMock()
        session.connection.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        db = DatabaseManager(session)

        with pytest.raises(StorageError) as excinfo:
            db.insert_thresholds(25.0, 60.0)

        assert excinfo.value.stage == StorageError.PREPARE
        session.execute.assert_not_called()

    def test_execute_failure_rolls_back(self):
        session = MagicMock()
        session.commit.side_effect = OperationalError("COMMIT", {}, Exception("gone away"))
        db = DatabaseManager(session)

        with pytest.raises(StorageError) as excinfo:
            db.insert_sensor_reading(20.0, 50.0, 0)

        assert excinfo.value.stage == StorageError.EXECUTE
        assert excinfo.value.detail == "gone away"
        session.rollback.assert_called_once()

    def test_manager_closes_own_session(self, monkeypatch):
        session = MagicMock()
        monkeypatch.setattr("api.database.SessionLocal", lambda: session)

        with DatabaseManager() as db:
            db.check_connection()

        session.close.assert_called_once()
