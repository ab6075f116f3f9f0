from dataclasses import dataclass

from user_registry.core.services import DbSessionService, UserValidator


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    user_validator: UserValidator
