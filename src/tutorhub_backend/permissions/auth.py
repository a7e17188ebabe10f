"""
Authentication for the Tutorhub platform.

Requests authenticate with HTTP Basic credentials
(`Authorization: Basic <base64(login:password)>`). The password is verified
against the stored Argon2 hash and the caller is turned into a Principal
carrying the user's id, login and authorities.
"""

import base64
import binascii
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from tutorhub_backend.database import get_db
from tutorhub_backend.exceptions import UnauthorizedException
from tutorhub_backend.model.auth import User
from tutorhub_backend.permissions.principal import Principal
from tutorhub_backend.repositories.user import UserRepository
from tutorhub_types.password_utils import verify_password

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Service for verifying credentials."""

    @staticmethod
    def authenticate_basic(login: str, password: str, db: Session) -> User:
        """
        Authenticate using basic auth credentials.

        Raises:
            UnauthorizedException: If the login is unknown or the password is wrong
        """
        user = UserRepository(db).find_one_by_login_with_groups_and_authorities(login)

        if user is None or not verify_password(password, user.password):
            logger.info(f"Failed basic authentication for login '{login}'")
            raise UnauthorizedException(detail="Invalid credentials")

        return user


class PrincipalBuilder:
    """Builder for creating Principal objects from authenticated users."""

    @staticmethod
    def build(user: User) -> Principal:
        return Principal(
            user_id=user.id,
            login=user.login,
            roles=sorted(user.authorities),
        )


def parse_authorization_header(request: Request) -> HTTPBasicCredentials:
    """Parse the Authorization header into basic credentials."""
    authorization = request.headers.get("Authorization")
    if not authorization:
        raise UnauthorizedException(detail="No authorization provided")

    scheme, param = get_authorization_scheme_param(authorization)

    if not param:
        raise UnauthorizedException(detail="Invalid authorization format")

    if scheme.lower() != "basic":
        raise UnauthorizedException(detail=f"Unsupported auth scheme: {scheme}")

    try:
        data = base64.b64decode(param, validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError, binascii.Error) as e:
        logger.error(f"Failed to decode Basic auth: {e}")
        raise UnauthorizedException(detail="Invalid Basic auth encoding")

    login, separator, password = data.partition(":")
    if not separator:
        raise UnauthorizedException(detail="Invalid Basic auth format")
    return HTTPBasicCredentials(username=login, password=password)


async def get_current_principal(
    credentials: HTTPBasicCredentials = Depends(parse_authorization_header),
    db: Session = Depends(get_db),
) -> Principal:
    """Main dependency for getting the current authenticated principal."""
    user = AuthenticationService.authenticate_basic(
        credentials.username, credentials.password, db
    )
    return PrincipalBuilder.build(user)
