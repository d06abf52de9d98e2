"""User use cases."""

from app.application.use_cases.users.create_user import CreateUserUseCase

__all__ = ["CreateUserUseCase"]
