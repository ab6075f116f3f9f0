"""Tests for the user registry error hierarchy."""

import pytest
from sqlalchemy.exc import OperationalError

from user_registry.core.exceptions import (
    AlreadyExistsError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    UserRegistryError,
)


@pytest.mark.parametrize(
    "error_cls", [InvalidInputError, NotFoundError, AlreadyExistsError, PersistenceError]
)
def test_all_errors_share_base(error_cls):
    assert issubclass(error_cls, UserRegistryError)


def test_message_is_string_form():
    error = InvalidInputError("Invalid email format.", details={"field": "email"})

    assert str(error) == "Invalid email format."
    assert error.message == "Invalid email format."
    assert error.details == {"field": "email"}


def test_already_exists_default_message():
    assert AlreadyExistsError().message == "This user already exists!"


def test_persistence_error_wraps_cause():
    cause = OperationalError("SELECT 1", {}, Exception("database is locked"))

    error = PersistenceError.from_exception(cause, operation="save")

    assert error.__cause__ is cause
    assert error.operation == "save"
    assert error.details == {"original_exception": "OperationalError"}
    assert "OperationalError" in error.message
