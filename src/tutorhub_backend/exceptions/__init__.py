"""
Error handling package for the Tutorhub backend.

Usage:
    from tutorhub_backend.exceptions import (
        NotFoundException,
        ForbiddenException,
        register_exception_handlers,
    )
"""

from tutorhub_backend.exceptions.exceptions import (
    TutorhubException,

    # Authentication exceptions (401)
    UnauthorizedException,

    # Authorization exceptions (403)
    ForbiddenException,
    AdminRequiredException,
    InsufficientCourseRoleException,

    # Validation exceptions (400)
    BadRequestException,
    MissingFieldException,
    InvalidFieldFormatException,

    # Not found exceptions (404)
    NotFoundException,
    UserNotFoundException,
    CourseNotFoundException,
    ExerciseNotFoundException,

    # Conflict exceptions (409)
    ConflictException,

    # Server exceptions (500/503)
    InternalServerException,
    ServiceUnavailableException,
)

from tutorhub_backend.exceptions.error_registry import (
    load_error_registry,
    get_error_definition,
    get_all_error_codes,
    get_errors_by_http_status,
    get_registry_version,
)

from tutorhub_backend.exceptions.error_handlers import (
    register_exception_handlers,
    tutorhub_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)


__all__ = [
    "TutorhubException",
    "UnauthorizedException",
    "ForbiddenException",
    "AdminRequiredException",
    "InsufficientCourseRoleException",
    "BadRequestException",
    "MissingFieldException",
    "InvalidFieldFormatException",
    "NotFoundException",
    "UserNotFoundException",
    "CourseNotFoundException",
    "ExerciseNotFoundException",
    "ConflictException",
    "InternalServerException",
    "ServiceUnavailableException",
    "load_error_registry",
    "get_error_definition",
    "get_all_error_codes",
    "get_errors_by_http_status",
    "get_registry_version",
    "register_exception_handlers",
    "tutorhub_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "generic_exception_handler",
]
