"""
Exception classes with error codes and rich metadata.

Every exception maps to an entry of the error registry, which determines the
default message, category and severity of the response sent to the client.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status
import inspect
from datetime import datetime, timezone

from tutorhub_types.errors import ErrorResponse, ErrorDebugInfo


class TutorhubException(HTTPException):
    """
    Base exception class for all Tutorhub exceptions.

    Provides:
    - Unique error codes from registry
    - Structured error responses
    - Debug information in development mode
    - Context metadata for logging
    """

    def __init__(
        self,
        error_code: str,
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
    ):
        """
        Initialize exception with error code and metadata.

        Args:
            error_code: Error code from error registry (e.g., "AUTHZ_001")
            detail: Additional detail message (overrides registry message if provided)
            headers: HTTP response headers
            context: Additional context for debugging
            user_id: User ID if available
        """
        self.error_code = error_code
        # HTTPException fills a missing detail with the status phrase
        self._detail = detail
        self.context = context or {}
        self.user_id = user_id

        # Skip this __init__ and the subclass __init__
        frame = inspect.currentframe()
        caller_frame = frame.f_back.f_back if frame and frame.f_back else None
        if caller_frame:
            self.function_name = caller_frame.f_code.co_name
            self.file_name = caller_frame.f_code.co_filename
            self.line_number = caller_frame.f_lineno
        else:
            self.function_name = None
            self.file_name = None
            self.line_number = None

        # The actual status_code is set by subclasses
        super().__init__(status_code=500, detail=detail, headers=headers)

    def to_error_response(self, include_debug: bool = False) -> ErrorResponse:
        """
        Convert exception to structured ErrorResponse.

        Args:
            include_debug: Whether to include debug information (dev mode only)

        Returns:
            ErrorResponse with error code, message, and optional debug info
        """
        from tutorhub_backend.exceptions.error_registry import get_error_definition

        error_def = get_error_definition(self.error_code)

        debug_info = None
        if include_debug:
            debug_info = ErrorDebugInfo(
                timestamp=datetime.now(timezone.utc).isoformat(),
                function=self.function_name,
                file=self.file_name,
                line=self.line_number,
                user_id=self.user_id,
                additional_context=self.context,
            )

        message = error_def.message.plain
        details = self.context if self.context else None

        if self._detail:
            if isinstance(self._detail, str):
                message = self._detail
            elif isinstance(self._detail, dict):
                details = self._detail
                if "message" in self._detail and isinstance(self._detail["message"], str):
                    message = self._detail["message"]

        return ErrorResponse(
            error_code=self.error_code,
            message=message,
            details=details,
            severity=error_def.severity,
            category=error_def.category,
            retry_after=error_def.retry_after,
            debug=debug_info,
        )


# ============================================================================
# AUTHENTICATION EXCEPTIONS (401)
# ============================================================================


class UnauthorizedException(TutorhubException):
    """Authentication required - 401"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "AUTH_001",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        if headers is None:
            headers = {"WWW-Authenticate": "Basic"}
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_401_UNAUTHORIZED


# ============================================================================
# AUTHORIZATION EXCEPTIONS (403)
# ============================================================================


class ForbiddenException(TutorhubException):
    """Insufficient permissions - 403"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "AUTHZ_001",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_403_FORBIDDEN


class AdminRequiredException(TutorhubException):
    """Admin access required - 403"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "AUTHZ_002",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_403_FORBIDDEN


class InsufficientCourseRoleException(TutorhubException):
    """Insufficient course role - 403"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "AUTHZ_003",
        headers: Optional[Dict[str, str]] = None,
        required_role: Optional[str] = None,
        **kwargs,
    ):
        if required_role:
            if "context" not in kwargs:
                kwargs["context"] = {}
            kwargs["context"]["required_role"] = required_role
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_403_FORBIDDEN


# ============================================================================
# VALIDATION EXCEPTIONS (400)
# ============================================================================


class BadRequestException(TutorhubException):
    """Invalid request data - 400"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "VAL_001",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_400_BAD_REQUEST


class MissingFieldException(TutorhubException):
    """Required field missing - 400"""

    def __init__(
        self,
        field_name: str,
        detail: Any = None,
        error_code: str = "VAL_002",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        if "context" not in kwargs:
            kwargs["context"] = {}
        kwargs["context"]["field_name"] = field_name
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_400_BAD_REQUEST


class InvalidFieldFormatException(TutorhubException):
    """Invalid field format - 400"""

    def __init__(
        self,
        field_name: str,
        expected_format: str,
        detail: Any = None,
        error_code: str = "VAL_003",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        if "context" not in kwargs:
            kwargs["context"] = {}
        kwargs["context"]["field_name"] = field_name
        kwargs["context"]["expected_format"] = expected_format
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_400_BAD_REQUEST


# ============================================================================
# NOT FOUND EXCEPTIONS (404)
# ============================================================================


class NotFoundException(TutorhubException):
    """Resource not found - 404"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "NF_001",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_404_NOT_FOUND


class UserNotFoundException(TutorhubException):
    """User not found - 404"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "NF_002",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_404_NOT_FOUND


class CourseNotFoundException(TutorhubException):
    """Course not found - 404"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "NF_003",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_404_NOT_FOUND


class ExerciseNotFoundException(TutorhubException):
    """Exercise not found - 404"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "NF_004",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_404_NOT_FOUND


# ============================================================================
# CONFLICT EXCEPTIONS (409)
# ============================================================================


class ConflictException(TutorhubException):
    """Resource conflict - 409"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "CONFLICT_001",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_409_CONFLICT


# ============================================================================
# SERVER EXCEPTIONS (500/503)
# ============================================================================


class InternalServerException(TutorhubException):
    """Internal server error - 500"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "INT_001",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ServiceUnavailableException(TutorhubException):
    """Service temporarily unavailable - 503"""

    def __init__(
        self,
        detail: Any = None,
        error_code: str = "SVC_001",
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
