# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for API users."""
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from people_api.models.tables import User


def _user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "password_hash": user.password_hash,
        "role": user.role,
    }


class UserRepository:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, username: str, password_hash: str, role: str) -> Dict[str, Any]:
        with self._session_factory.begin() as session:
            user = User(username=username, password_hash=password_hash, role=role)
            session.add(user)
            session.flush()
            return _user_to_dict(user)

    def get_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        with self._session_factory() as session:
            user = session.scalars(
                select(User).where(User.username == username)
            ).first()
            return _user_to_dict(user) if user else None
