"""Tests for the error registry and the exception to response conversion."""

import pytest

from tutorhub_backend.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    InvalidFieldFormatException,
    MissingFieldException,
    NotFoundException,
    ServiceUnavailableException,
    UnauthorizedException,
    get_all_error_codes,
    get_error_definition,
    get_errors_by_http_status,
    get_registry_version,
)


@pytest.mark.unit
class TestErrorRegistry:

    def test_registry_contains_all_codes(self):
        codes = set(get_all_error_codes())

        assert {
            "AUTH_001", "AUTHZ_001", "AUTHZ_002", "AUTHZ_003",
            "VAL_001", "VAL_002", "VAL_003",
            "NF_001", "NF_002", "NF_003", "NF_004",
            "CONFLICT_001", "INT_001", "SVC_001",
        } <= codes
        assert get_registry_version() == "1.0"

    def test_definitions_match_status(self):
        assert {d.code for d in get_errors_by_http_status(404)} == {"NF_001", "NF_002", "NF_003", "NF_004"}
        assert get_error_definition("SVC_001").retry_after == 2

    def test_unknown_code_falls_back(self):
        definition = get_error_definition("NOPE_999")

        assert definition.code == "UNKNOWN"
        assert definition.http_status == 500


@pytest.mark.unit
class TestExceptions:

    @pytest.mark.parametrize("exception_class,status_code", [
        (UnauthorizedException, 401),
        (ForbiddenException, 403),
        (BadRequestException, 400),
        (NotFoundException, 404),
        (ConflictException, 409),
        (ServiceUnavailableException, 503),
    ])
    def test_status_codes(self, exception_class, status_code):
        assert exception_class().status_code == status_code

    def test_detail_overrides_registry_message(self):
        response = NotFoundException(detail="Team 3 not found").to_error_response()

        assert response.error_code == "NF_001"
        assert response.message == "Team 3 not found"
        assert response.debug is None

    def test_registry_message_is_default(self):
        response = ConflictException().to_error_response()

        assert response.message == get_error_definition("CONFLICT_001").message.plain

    def test_field_exceptions_record_field(self):
        missing = MissingFieldException("id")
        invalid = InvalidFieldFormatException("loginOrName", "at least 3 characters")

        assert missing.context == {"field_name": "id"}
        assert invalid.context["expected_format"] == "at least 3 characters"

    def test_debug_info_records_caller(self):
        def raise_it():
            raise ForbiddenException(detail="denied", user_id="1")

        with pytest.raises(ForbiddenException) as exc_info:
            raise_it()

        response = exc_info.value.to_error_response(include_debug=True)
        assert response.debug.function == "raise_it"
        assert response.debug.user_id == "1"
