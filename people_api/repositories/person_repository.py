# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for people."""
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select, text
from sqlalchemy.orm import sessionmaker

from people_api.core.logging import get_logger
from people_api.models.tables import Person
from people_api.repositories.person_query import (
    contains_ci, build_filters, page_offset, resolve_ordering,
)

logger = get_logger(__name__)

MUTABLE_FIELDS = ("name", "age", "email")


def _person_to_dict(person: Person) -> Dict[str, Any]:
    return {
        "id": person.id,
        "name": person.name,
        "age": person.age,
        "email": person.email,
    }


class PersonRepository:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, name: str, age: int, email: str) -> Dict[str, Any]:
        with self._session_factory.begin() as session:
            person = Person(name=name, age=age, email=email)
            session.add(person)
            session.flush()
            return _person_to_dict(person)

    def update(self, person_id: int, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._session_factory.begin() as session:
            person = session.get(Person, person_id)
            if person is None:
                return None
            for key in MUTABLE_FIELDS:
                setattr(person, key, fields[key])
            session.flush()
            return _person_to_dict(person)

    def delete(self, person_id: int) -> bool:
        with self._session_factory.begin() as session:
            person = session.get(Person, person_id)
            if person is None:
                return False
            session.delete(person)
        return True

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, person_id: int) -> Optional[Dict[str, Any]]:
        with self._session_factory() as session:
            person = session.get(Person, person_id)
            return _person_to_dict(person) if person else None

    def exists(self, person_id: int) -> bool:
        with self._session_factory() as session:
            stmt = select(Person.id).where(Person.id == person_id).limit(1)
            return session.execute(stmt).first() is not None

    def search(self, name: Optional[str] = None, min_age: Optional[int] = None,
               max_age: Optional[int] = None, email_domain: Optional[str] = None,
               sort_by: str = "Name", sort_direction: str = "asc",
               page_number: int = 1,
               page_size: int = 10) -> Tuple[int, List[Dict[str, Any]]]:
        conditions = build_filters(name, min_age, max_age, email_domain)
        with self._session_factory() as session:
            # count runs on the filtered set before any paging
            total = session.scalar(
                select(func.count()).select_from(Person).where(*conditions)
            ) or 0
            stmt = (
                select(Person)
                .where(*conditions)
                .order_by(*resolve_ordering(sort_by, sort_direction))
                .offset(page_offset(page_number, page_size))
                .limit(page_size)
            )
            rows = session.scalars(stmt).all()
            return total, [_person_to_dict(p) for p in rows]

    def list_by_age_range(self, min_age: int, max_age: int) -> List[Dict[str, Any]]:
        with self._session_factory() as session:
            stmt = (
                select(Person)
                .where(Person.age >= min_age, Person.age <= max_age)
                .order_by(Person.age.asc(), Person.id.asc())
            )
            return [_person_to_dict(p) for p in session.scalars(stmt).all()]

    def count_by_email_domain(self, domain: str) -> int:
        with self._session_factory() as session:
            return session.scalar(
                select(func.count()).select_from(Person)
                .where(contains_ci(Person.email, domain))
            ) or 0

    def verify_connection(self):
        with self._session_factory() as session:
            session.execute(text("SELECT 1"))
