from sqlalchemy import Column, String, DateTime
from datetime import datetime, timezone
from leavedash.db.session import Base


def utc_now():
    return datetime.now(timezone.utc)


class UIPreference(Base):
    """Dashboard UI state that survives a reload, e.g. whether the sidebar is open."""
    __tablename__ = "ui_preferences"

    key = Column(String(100), primary_key=True)
    value = Column(String, nullable=True)

    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self):
        return f"<UIPreference(key={self.key}, value={self.value})>"
