from sqlalchemy import Column, Integer, Text, Boolean, DateTime
from datetime import datetime, timezone
from taskboard_api.database import Base


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the stored columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Task(Base):
    """Task model for database"""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    is_completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', is_completed={self.is_completed})>"
