"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.existence_checker import ExistenceChecker

__all__ = ["ExistenceChecker"]
