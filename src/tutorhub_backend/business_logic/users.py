"""Business logic for resolving the calling user."""

from sqlalchemy.orm import Session

from tutorhub_backend.exceptions import UserNotFoundException
from tutorhub_backend.model.auth import User
from tutorhub_backend.permissions.principal import Principal
from tutorhub_backend.repositories.user import UserRepository


def get_user_with_groups_and_authorities(principal: Principal, db: Session) -> User:
    """
    Load the user behind a principal together with groups and authorities.

    Raises:
        UserNotFoundException: If the user was deleted after authentication
    """
    user = UserRepository(db).find_one_with_groups_and_authorities(principal.user_id)
    if user is None:
        raise UserNotFoundException(detail=f"User {principal.user_id} not found")
    return user
