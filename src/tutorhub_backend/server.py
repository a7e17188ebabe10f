from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.orm import Session

from tutorhub_backend.api.grading_criteria import grading_criteria_router
from tutorhub_backend.api.system_notifications import system_notifications_router
from tutorhub_backend.api.teams import limiter, teams_router
from tutorhub_backend.database import get_db
from tutorhub_backend.exceptions import register_exception_handlers
from tutorhub_backend.model.auth import User, UserRole
from tutorhub_backend.permissions.principal import authority_name
from tutorhub_backend.repositories.user import UserRepository
from tutorhub_backend.settings import settings
from tutorhub_types.password_utils import hash_password

logger = logging.getLogger(__name__)


def init_admin_user(db: Session):
    """Create the initial administrator from ADMIN_LOGIN/ADMIN_PASSWORD unless it exists."""
    login = settings.ADMIN_LOGIN
    password = settings.ADMIN_PASSWORD

    if not login or not password:
        logger.warning("ADMIN_LOGIN/ADMIN_PASSWORD not set, skipping admin user creation")
        return

    if UserRepository(db).find_one_by_login_with_groups_and_authorities(login) is not None:
        return

    admin_user = User(
        login=login,
        first_name="Admin",
        last_name="System",
        password=hash_password(password),
    )
    admin_user.user_roles = [
        UserRole(role_id=authority_name("ADMIN")),
        UserRole(role_id=authority_name("USER")),
    ]
    UserRepository(db).create(admin_user)
    logger.info(f"Created admin user '{login}'")


def startup_logic():
    for db in get_db():
        init_admin_user(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DEBUG_MODE == "production":
        startup_logic()

    yield


app = FastAPI(title="Tutorhub Backend", lifespan=lifespan)

# The team search endpoint is rate limited per client address
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Register custom exception handlers for structured error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[
        "Location",
        f"X-{settings.APPLICATION_NAME}-alert",
        f"X-{settings.APPLICATION_NAME}-error",
        f"X-{settings.APPLICATION_NAME}-params",
    ],
)

app.include_router(teams_router)
app.include_router(grading_criteria_router)
app.include_router(system_notifications_router)


@app.head("/", status_code=204)
def get_status_head():
    return
