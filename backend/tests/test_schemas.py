"""Tests for request and response schemas."""

import pytest
from pydantic import ValidationError

from app.schemas.admin import CreateUserRequest, UpdateUserRequest
from app.schemas.auth import RegisterRequest, ResetPasswordRequest, UserInfo
from app.schemas.common import ErrorDetail, ErrorResponse, PaginatedResponse


class TestRegisterRequest:
    def test_valid(self):
        data = RegisterRequest(email="a@x.com", password="pw123456", name="A")
        assert data.email == "a@x.com"

    @pytest.mark.parametrize("password", ["short", " " * 10, "x" * 73])
    def test_rejects_bad_passwords(self, password):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a@x.com", password=password, name="A")

    def test_rejects_multibyte_password_over_72_bytes(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a@x.com", password="é" * 40, name="A")

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="not-an-email", password="pw123456", name="A")


def test_reset_password_requires_token():
    with pytest.raises(ValidationError):
        ResetPasswordRequest(token="", new_password="pw123456")


def test_user_info_has_no_password_hash():
    assert "password_hash" not in UserInfo.model_fields


def test_create_user_defaults_to_user_role():
    data = CreateUserRequest(email="a@x.com", password="pw123456", name="A")
    assert data.role == "USER"


def test_update_user_tracks_unset_fields():
    data = UpdateUserRequest(name="B")
    assert data.model_dump(exclude_unset=True) == {"name": "B"}


class TestErrorResponse:
    def test_error_response_structure(self):
        response = ErrorResponse(
            status=404,
            error="NotFound",
            message="User not found",
            path="/api/admin/users/1",
        )
        assert response.status == 404
        assert response.details is None
        assert response.timestamp.tzinfo is not None

    def test_error_response_with_details(self):
        response = ErrorResponse(
            status=400,
            error="ValidationError",
            message="Request validation failed",
            details=[ErrorDetail(field="email", message="invalid")],
        )
        assert response.details[0].field == "email"


def test_paginated_response():
    response = PaginatedResponse[ErrorDetail](
        items=[ErrorDetail(message="x")], total=3, skip=0, limit=1, has_more=True
    )
    assert response.model_dump()["has_more"] is True


@pytest.mark.parametrize("schema", [CreateUserRequest, UpdateUserRequest])
def test_admin_schemas_reject_blank_name(schema):
    with pytest.raises(ValidationError):
        schema(email="a@x.com", password="pw123456", name="   ")
