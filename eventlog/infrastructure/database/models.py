# eventlog/infrastructure/database/models.py

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from eventlog.infrastructure.database.session import Base


class EventLogRow(Base):
    """ORM model for persisted event logs. Column event_date maps to EventLog.event_date."""

    __tablename__ = "event_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(16), nullable=False, index=True)
    description = Column(Text, nullable=False)
    event_date = Column(DateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (
        Index("ix_event_logs_event_date_id", "event_date", "id"),
    )
