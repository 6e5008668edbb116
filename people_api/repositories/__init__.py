# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports the people and user repositories."""
from people_api.repositories.person_repository import PersonRepository
from people_api.repositories.user_repository import UserRepository

__all__ = ["PersonRepository", "UserRepository"]
