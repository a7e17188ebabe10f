"""User repository for direct database access."""

from typing import List, Optional
from sqlalchemy import or_, func
from sqlalchemy.orm import Session, selectinload

from .base import BaseRepository
from ..model.auth import User, UserGroup

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape the LIKE wildcards of a user supplied term."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class UserRepository(BaseRepository[User]):
    """Repository for User entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def find_one_with_groups_and_authorities(self, user_id: int) -> Optional[User]:
        """Find a user by id with group memberships and authorities loaded."""
        return (
            self.db.query(User)
            .options(selectinload(User.user_groups), selectinload(User.user_roles))
            .filter(User.id == user_id)
            .first()
        )

    def find_one_by_login_with_groups_and_authorities(self, login: str) -> Optional[User]:
        """Find a user by login (case-insensitive) with groups and authorities loaded."""
        return (
            self.db.query(User)
            .options(selectinload(User.user_groups), selectinload(User.user_roles))
            .filter(func.lower(User.login) == login.lower())
            .first()
        )

    def find_all_by_ids(self, user_ids: List[int]) -> List[User]:
        if not user_ids:
            return []
        return self.db.query(User).filter(User.id.in_(user_ids)).all()

    def search_by_login_or_name_in_group(self, group_name: str, login_or_name: str) -> List[User]:
        """
        Search members of a group by login or name.

        Matches case-insensitive substrings of the login, the first name,
        the last name and the full name ("first last").

        Args:
            group_name: Group whose members are searched
            login_or_name: Search term

        Returns:
            Matching users ordered by login
        """
        # The term is matched literally, wildcards included
        pattern = f"%{escape_like(login_or_name.lower())}%"
        full_name = func.lower(
            func.coalesce(User.first_name, "") + " " + func.coalesce(User.last_name, "")
        )

        return (
            self.db.query(User)
            .join(UserGroup, UserGroup.user_id == User.id)
            .filter(
                UserGroup.group_name == group_name,
                or_(
                    func.lower(User.login).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(User.first_name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(User.last_name).like(pattern, escape=LIKE_ESCAPE),
                    full_name.like(pattern, escape=LIKE_ESCAPE),
                ),
            )
            .order_by(User.login)
            .distinct()
            .all()
        )
