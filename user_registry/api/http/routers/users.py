"""User API router: registration, lookup, merge-update, removal and range query.

Outcomes that are not a user or a list of users are returned as plain text.
"""

from datetime import date

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import PlainTextResponse, Response

from user_registry.api.http.deps import get_user_service
from user_registry.core.exceptions import (
    AlreadyExistsError,
    InvalidInputError,
    NotFoundError,
)
from user_registry.core.services import UserService
from user_registry.entities.user import User

router = APIRouter(prefix="/users", tags=["users"])

# Ids outside the signed 64-bit INTEGER range cannot be looked up
MIN_USER_ID = -(2**63)
MAX_USER_ID = 2**63 - 1


@router.post("", response_class=PlainTextResponse)
def register_user(
    user: User,
    user_service: UserService = Depends(get_user_service),
) -> PlainTextResponse:
    """Register a new user."""
    try:
        user_service.create_user(user)
    except (InvalidInputError, AlreadyExistsError) as e:
        return PlainTextResponse(e.message, status_code=400)
    return PlainTextResponse("User added successfully.")


@router.get("", response_model=list[User])
def list_users(
    user_service: UserService = Depends(get_user_service),
) -> list[User]:
    """List all users."""
    return user_service.list_users()


@router.get("/birthdate-range", response_model=list[User])
def get_users_in_date_range(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    user_service: UserService = Depends(get_user_service),
) -> list[User] | Response:
    """List users born between ``startDate`` and ``endDate`` inclusive."""
    try:
        return user_service.get_users_in_date_range(start_date, end_date)
    except InvalidInputError as e:
        return PlainTextResponse(e.message, status_code=400)


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: int = Path(ge=MIN_USER_ID, le=MAX_USER_ID),
    user_service: UserService = Depends(get_user_service),
) -> User | Response:
    """Get a user by ID."""
    try:
        return user_service.get_user_by_id(user_id)
    except NotFoundError:
        return PlainTextResponse(
            f"User not found with id: {user_id}", status_code=404
        )


@router.delete("/{user_id}", response_class=PlainTextResponse)
def delete_user(
    user_id: int = Path(ge=MIN_USER_ID, le=MAX_USER_ID),
    user_service: UserService = Depends(get_user_service),
) -> PlainTextResponse:
    """Delete a user."""
    try:
        user_service.delete_user(user_id)
    except NotFoundError:
        return PlainTextResponse(
            "The user was not deleted because the user was not found "
            f"by id: {user_id}",
            status_code=404,
        )
    return PlainTextResponse("User deleted successfully.")


@router.patch("/{user_id}", response_model=User)
def update_user(
    user: User,
    user_id: int = Path(ge=MIN_USER_ID, le=MAX_USER_ID),
    user_service: UserService = Depends(get_user_service),
) -> User | Response:
    """Replace every field of a user except its ID."""
    try:
        return user_service.update_user(user, user_id)
    except (InvalidInputError, AlreadyExistsError) as e:
        return PlainTextResponse(e.message, status_code=400)
