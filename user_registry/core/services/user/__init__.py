from .user_service import UserService
from .validator import UserValidator

__all__ = ["UserService", "UserValidator"]
