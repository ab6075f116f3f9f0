"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from user_registry.api.http.app_data import ApplicationDependencies
from user_registry.core.services import DbSessionService, UserService, UserValidator
from user_registry.entities.user import UserRepository


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a request-scoped database session."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_user_repository(db: Session = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


def get_user_validator(request: Request) -> UserValidator:
    """Get the validator built at startup with the configured age floor."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.user_validator


def get_user_service(
    user_repository: UserRepository = Depends(get_user_repository),
    validator: UserValidator = Depends(get_user_validator),
) -> UserService:
    return UserService(user_repository, validator)
