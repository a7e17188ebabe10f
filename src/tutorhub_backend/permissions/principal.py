from typing import List
from pydantic import BaseModel, Field

ROLE_PREFIX = "ROLE_"


def authority_name(role: str) -> str:
    """Normalize "TA" and "ROLE_TA" to the stored authority name "ROLE_TA"."""
    role = role.upper()
    return role if role.startswith(ROLE_PREFIX) else f"{ROLE_PREFIX}{role}"


class Principal(BaseModel):
    """
    The authenticated caller of a request.

    Built once per request by the authentication dependency and passed
    explicitly to every handler and service that needs the caller.
    """
    user_id: int
    login: str
    roles: List[str] = Field(default_factory=list)

    def has_any_role(self, *roles: str) -> bool:
        wanted = {authority_name(role) for role in roles}
        return any(authority_name(role) in wanted for role in self.roles)

    @property
    def is_admin(self) -> bool:
        return self.has_any_role("ADMIN")
