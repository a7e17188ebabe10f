"""API endpoints for system notifications shown to every user of the platform."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from tutorhub_backend.business_logic.system_notifications import (
    get_system_notification,
    save_system_notification,
)
from tutorhub_backend.database import get_db
from tutorhub_backend.exceptions import (
    AdminRequiredException,
    BadRequestException,
    MissingFieldException,
)
from tutorhub_backend.permissions.core import ADMIN_ROLES
from tutorhub_backend.permissions.guards import require_roles
from tutorhub_backend.permissions.principal import Principal
from tutorhub_backend.repositories.system_notification import SystemNotificationRepository
from tutorhub_backend.utils.alerts import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)
from tutorhub_types.system_notifications import SystemNotificationBody, SystemNotificationGet

logger = logging.getLogger(__name__)

ENTITY_NAME = "systemNotification"

system_notifications_router = APIRouter(prefix="/system-notifications", tags=["system-notifications"])

require_admin = require_roles(*ADMIN_ROLES, exception_class=AdminRequiredException)


@system_notifications_router.get("/active", response_model=List[SystemNotificationGet])
async def list_active_system_notifications(db: Session = Depends(get_db)) -> List[SystemNotificationGet]:
    """Notifications active right now, oldest first. Available without authentication."""
    notifications = SystemNotificationRepository(db).find_all_active()
    return [SystemNotificationGet.model_validate(n) for n in notifications]


@system_notifications_router.get("", response_model=List[SystemNotificationGet])
async def list_system_notifications(
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> List[SystemNotificationGet]:
    notifications = SystemNotificationRepository(db).list_by_notification_date()
    return [SystemNotificationGet.model_validate(n) for n in notifications]


@system_notifications_router.get("/{notification_id}", response_model=SystemNotificationGet)
async def get_system_notification_by_id(
    notification_id: int,
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SystemNotificationGet:
    return SystemNotificationGet.model_validate(get_system_notification(notification_id, db))


@system_notifications_router.post(
    "",
    response_model=SystemNotificationGet,
    status_code=status.HTTP_201_CREATED,
)
async def create_system_notification(
    data: SystemNotificationBody,
    response: Response,
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SystemNotificationGet:
    if data.id is not None:
        raise BadRequestException(
            detail="A new system notification cannot already have an id",
            context={"error_key": "idexists", "entity_name": ENTITY_NAME},
        )

    notification = save_system_notification(data, db)

    response.headers["Location"] = f"/system-notifications/{notification.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, str(notification.id)))
    return SystemNotificationGet.model_validate(notification)


@system_notifications_router.put("", response_model=SystemNotificationGet)
async def update_system_notification(
    data: SystemNotificationBody,
    response: Response,
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SystemNotificationGet:
    if data.id is None:
        raise MissingFieldException(
            "id",
            detail="An updated system notification must have an id",
            context={"error_key": "idnull", "entity_name": ENTITY_NAME},
        )

    notification = save_system_notification(data, db, get_system_notification(data.id, db))

    response.headers.update(create_entity_update_alert(ENTITY_NAME, str(notification.id)))
    return SystemNotificationGet.model_validate(notification)


@system_notifications_router.delete("/{notification_id}")
async def delete_system_notification(
    notification_id: int,
    response: Response,
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> None:
    notification = get_system_notification(notification_id, db)
    SystemNotificationRepository(db).delete(notification)

    logger.info(f"User {principal.login} deleted system notification {notification_id}")
    response.headers.update(create_entity_deletion_alert(ENTITY_NAME, str(notification_id)))
