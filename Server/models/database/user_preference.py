"""
Watchpost Server - User Preference Database Model

Per-user overrides of the global configuration, one row per app.* key.
A missing row means the user inherits the global default.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint

from models.database.base import Base


class UserPreference(Base):
    """
    User preferences table - stores explicit per-user overrides as key-value pairs
    """
    __tablename__ = "user_preferences"
    __table_args__ = (UniqueConstraint("username", "key", name="uq_user_preference"),)

    preference_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False, index=True)
    key = Column(String, nullable=False)
    value = Column(String, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
