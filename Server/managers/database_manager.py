"""
Watchpost Server - Database Manager

This module manages the preferences database connection, initialization,
and reading/writing of per-user preferences.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from models.database import Base, UserPreference

# Create logger
logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages database connection, initialization, and preference operations
    """

    def __init__(self, db_path: str = "database/watchpost.db"):
        """
        Initialize database manager

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path

        # Ensure database directory exists
        db_dir = Path(db_path).parent
        if db_dir and str(db_dir) != '.':
            db_dir.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(f"sqlite:///{db_path}", echo=False)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def InitializeDatabase(self) -> None:
        """
        Create all tables if they don't exist
        """
        Base.metadata.create_all(bind=self.engine)

    def GetSession(self):
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()

    # ==================== User Preferences ====================

    def GetUserPreferences(self, username: str) -> Dict[str, str]:
        """
        Get the explicit preferences of a user

        Args:
            username: Name of the user

        Returns:
            dict: app.* key mapped to the stored value, only keys the user overrides
        """
        session = self.GetSession()
        try:
            rows = session.query(UserPreference).filter(UserPreference.username == username).all()
            return {row.key: row.value for row in rows}
        finally:
            session.close()

    def SaveUserPreferences(self, username: str, preferences: Dict[str, Any]) -> bool:
        """
        Replace the preferences of a user

        A value of None removes the override so the global default applies again.
        Booleans are stored as "1" and "0".

        Args:
            username: Name of the user
            preferences: app.* key mapped to the new value or None

        Returns:
            bool: True if the preferences were written, False otherwise
        """
        session = self.GetSession()
        try:
            for key, value in preferences.items():
                record = session.query(UserPreference).filter(
                    UserPreference.username == username,
                    UserPreference.key == key
                ).first()

                if value is None:
                    if record:
                        session.delete(record)
                    continue

                value = self._Serialize(value)
                if record:
                    record.value = value
                    record.updated_at = datetime.now(timezone.utc)
                else:
                    session.add(UserPreference(username=username, key=key, value=value))

            session.commit()
            return True

        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to save preferences of user '{username}': {str(e)}")
            return False
        finally:
            session.close()

    @staticmethod
    def _Serialize(value: Any) -> str:
        if isinstance(value, bool):
            return "1" if value else "0"
        return str(value)
