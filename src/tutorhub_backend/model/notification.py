from datetime import datetime

from sqlalchemy import (
    Column, DateTime, Enum, Index, String
)

from tutorhub_types.system_notifications import as_utc

from .base import Base, BigIntId


class SystemNotification(Base):
    __tablename__ = 'system_notification'
    __table_args__ = (
        Index('system_notification_window_idx', 'notification_date', 'expire_date'),
    )

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    text = Column(String(16384))
    type = Column(Enum('INFO', 'WARNING', name='system_notification_type'), nullable=False, server_default='INFO')
    # Stored in UTC; SQLite hands them back naive
    notification_date = Column(DateTime(True), nullable=False)
    expire_date = Column(DateTime(True))

    def is_active(self, now: datetime) -> bool:
        """Active iff now lies within [notification_date, expire_date]; no expire date means open-ended."""
        now = as_utc(now)
        if now < as_utc(self.notification_date):
            return False
        return self.expire_date is None or now <= as_utc(self.expire_date)
