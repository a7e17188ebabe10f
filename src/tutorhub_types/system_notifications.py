from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from tutorhub_types.base import BaseEntityGet


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SystemNotificationType(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"


class SystemNotificationBody(BaseModel):
    """System notification as sent by an administrator."""
    id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=255)
    text: Optional[str] = Field(None, max_length=16384)
    type: SystemNotificationType = SystemNotificationType.INFO
    notification_date: datetime
    expire_date: Optional[datetime] = None

    @model_validator(mode="after")
    def check_expire_after_notification(self):
        if self.expire_date is not None and as_utc(self.expire_date) < as_utc(self.notification_date):
            raise ValueError("expire_date must not be before notification_date")
        return self


class SystemNotificationGet(BaseEntityGet):
    title: str
    text: Optional[str] = None
    type: SystemNotificationType
    notification_date: datetime
    expire_date: Optional[datetime] = None
