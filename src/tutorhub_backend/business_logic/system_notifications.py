"""Business logic for administrating system notifications."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from tutorhub_backend.exceptions import NotFoundException
from tutorhub_backend.model.notification import SystemNotification
from tutorhub_backend.repositories.system_notification import SystemNotificationRepository
from tutorhub_types.system_notifications import SystemNotificationBody, as_utc

logger = logging.getLogger(__name__)


def get_system_notification(notification_id: int, db: Session) -> SystemNotification:
    """
    Get a system notification by id.

    Raises:
        NotFoundException: If the notification does not exist
    """
    notification = SystemNotificationRepository(db).get_by_id_optional(notification_id)
    if notification is None:
        raise NotFoundException(detail=f"System notification {notification_id} not found")
    return notification


def save_system_notification(
    data: SystemNotificationBody,
    db: Session,
    notification: Optional[SystemNotification] = None,
) -> SystemNotification:
    """
    Create a notification or overwrite an existing one with the given data.

    Dates are stored in UTC; naive dates are taken to be UTC already.
    """
    repository = SystemNotificationRepository(db)

    creating = notification is None
    if creating:
        notification = SystemNotification()

    notification.title = data.title
    notification.text = data.text
    notification.type = data.type.value
    notification.notification_date = as_utc(data.notification_date)
    notification.expire_date = as_utc(data.expire_date)

    if creating:
        notification = repository.create(notification)
    else:
        notification = repository.update(notification)

    logger.info(f"{'Created' if creating else 'Updated'} system notification {notification.id}")
    return notification
