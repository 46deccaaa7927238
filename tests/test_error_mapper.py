"""
Tests for the error mapper.

Every failure kind maps to one problem shape with the right status,
type and extension members.
"""

import pytest

from app.domain.heroes.entities import FieldError, FieldErrorCode
from app.domain.heroes.errors import (
    HeroNotFoundError,
    MissingVersionError,
    StorageUnavailableError,
    UniquenessConflictError,
    ValidationError,
    VersionConflictError,
)
from app.shared.errors.exceptions import RequestTimeoutError
from app.shared.errors.mapper import (
    PROBLEM_TYPE_BASE,
    field_errors_from_request,
    to_problem,
)


class TestToProblem:
    """Tests for to_problem."""

    @pytest.mark.parametrize(
        ("exc", "status", "kind"),
        [
            (ValidationError([FieldError("name", FieldErrorCode.REQUIRED, "name is required")]), 400, "validation-error"),
            (HeroNotFoundError(1), 404, "not-found"),
            (UniquenessConflictError("name", "Nightglow"), 409, "uniqueness-conflict"),
            (VersionConflictError(1, 1, 2), 412, "version-conflict"),
            (MissingVersionError(1), 428, "precondition-required"),
            (StorageUnavailableError("list"), 503, "storage-unavailable"),
            (RequestTimeoutError(1.0), 504, "request-timeout"),
            (RuntimeError("boom"), 500, "internal-error"),
        ],
    )
    def test_status_and_type(self, exc, status, kind) -> None:
        problem = to_problem(exc, instance="/api/v1/heroes/1")
        body = problem.to_dict()
        assert body["status"] == status
        assert body["type"] == PROBLEM_TYPE_BASE + kind
        assert body["title"]
        assert body["instance"] == "/api/v1/heroes/1"

    def test_validation_details_list_every_field(self) -> None:
        exc = ValidationError([
            FieldError("name", FieldErrorCode.REQUIRED, "name is required"),
            FieldError("abilities", FieldErrorCode.INVALID, "indices: 0"),
        ])
        body = to_problem(exc).to_dict()
        assert body["errors"] == [
            {"field": "name", "code": "FieldRequired", "message": "name is required"},
            {"field": "abilities", "code": "FieldInvalid", "message": "indices: 0"},
        ]

    def test_version_conflict_discloses_both_versions(self) -> None:
        body = to_problem(VersionConflictError(1, submitted=1, current=2)).to_dict()
        assert body["submitted_version"] == 1
        assert body["current_version"] == 2

    def test_uniqueness_conflict_names_field(self) -> None:
        body = to_problem(UniquenessConflictError("name", "Nightglow")).to_dict()
        assert body["field"] == "name"
        assert body["value"] == "Nightglow"

    def test_not_found_carries_key(self) -> None:
        assert to_problem(HeroNotFoundError(9)).to_dict()["hero_id"] == 9

    def test_unexpected_error_exposes_nothing(self) -> None:
        body = to_problem(RuntimeError("password=hunter2")).to_dict()
        assert "hunter2" not in str(body)
        assert set(body) == {"type", "title", "status"}


class TestFieldErrorsFromRequest:
    """Tests for converting FastAPI request errors."""

    def test_missing_and_invalid(self) -> None:
        errors = field_errors_from_request([
            {"loc": ("body", "can_fly"), "msg": "Input should be a valid boolean", "type": "bool_type"},
            {"loc": ("body",), "msg": "Field required", "type": "missing"},
            {"loc": ("path", "hero_id"), "msg": "Input should be a valid integer", "type": "int_parsing"},
        ])
        assert [(e.field, e.code) for e in errors] == [
            ("can_fly", FieldErrorCode.INVALID),
            ("body", FieldErrorCode.REQUIRED),
            ("hero_id", FieldErrorCode.INVALID),
        ]

    def test_nested_location_kept_in_message(self) -> None:
        (error,) = field_errors_from_request([
            {"loc": ("body", "abilities", 2), "msg": "bad", "type": "string_type"},
        ])
        assert error.field == "abilities"
        assert error.message == "bad (at 2)"
