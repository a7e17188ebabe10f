"""FastAPI-facing helpers that turn authorization decisions into HTTP errors."""

import logging
from typing import Callable, Type

from fastapi import Depends

from tutorhub_backend.exceptions import ForbiddenException, TutorhubException
from tutorhub_backend.permissions.auth import get_current_principal
from tutorhub_backend.permissions.core import AuthorizationDecision, check_role_gate
from tutorhub_backend.permissions.principal import Principal

logger = logging.getLogger(__name__)


def enforce(
    decision: AuthorizationDecision,
    principal: Principal = None,
    exception_class: Type[TutorhubException] = ForbiddenException,
) -> None:
    """Raise the given exception (403 by default) when the decision denies access."""
    if decision:
        return

    user_id = str(principal.user_id) if principal else None
    logger.debug(f"Access denied for user {user_id}: {decision.reason}")
    raise exception_class(
        context={"reason": decision.reason},
        user_id=user_id,
    )


def require_roles(
    *roles: str,
    exception_class: Type[TutorhubException] = ForbiddenException,
) -> Callable[..., Principal]:
    """
    Build a dependency that authenticates the caller and applies the role gate.

    Usage:
        @router.get("/teams")
        async def exists(principal: Principal = Depends(require_roles(*STAFF_ROLES))):
            ...
    """

    async def role_gate(principal: Principal = Depends(get_current_principal)) -> Principal:
        enforce(check_role_gate(principal, roles), principal, exception_class)
        return principal

    return role_gate
