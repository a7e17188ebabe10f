"""System notification repository for direct database access."""

from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.notification import SystemNotification


class SystemNotificationRepository(BaseRepository[SystemNotification]):
    """Repository for SystemNotification entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db, SystemNotification)

    def find_all_active(self, now: Optional[datetime] = None) -> List[SystemNotification]:
        """
        Find all notifications active at the given time.

        A notification is active when its notification date has passed and
        it has either no expire date or one that has not passed yet.

        Args:
            now: Reference time, defaults to the current UTC time

        Returns:
            Active notifications ordered by notification date ascending
        """
        if now is None:
            now = datetime.now(timezone.utc)

        return (
            self.db.query(SystemNotification)
            .filter(
                SystemNotification.notification_date <= now,
                or_(
                    SystemNotification.expire_date.is_(None),
                    SystemNotification.expire_date >= now,
                ),
            )
            .order_by(SystemNotification.notification_date.asc(), SystemNotification.id.asc())
            .all()
        )

    def list_by_notification_date(self) -> List[SystemNotification]:
        """All notifications, most recent first."""
        return (
            self.db.query(SystemNotification)
            .order_by(SystemNotification.notification_date.desc())
            .all()
        )
