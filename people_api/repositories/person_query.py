# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Query building for people search: filter predicates, sort resolution and
page offsets. Pure statement composition, no session access.
"""
from enum import Enum
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement

from people_api.models.tables import Person


_LIKE_ESCAPE = "\\"


def contains_ci(column, needle: str) -> ColumnElement:
    """Case-insensitive substring match; LIKE wildcards in ``needle`` are literal."""
    escaped = (
        needle.lower()
        .replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return func.lower(column).like(f"%{escaped}%", escape=_LIKE_ESCAPE)


def build_filters(name: Optional[str] = None, min_age: Optional[int] = None,
                  max_age: Optional[int] = None,
                  email_domain: Optional[str] = None) -> List[ColumnElement]:
    """Return the predicates for every supplied criterion.

    Blank strings count as absent. An empty list matches every row.
    ``min_age > max_age`` simply matches nothing.
    """
    conditions: List[ColumnElement] = []
    if name and name.strip():
        conditions.append(contains_ci(Person.name, name))
    if min_age is not None:
        conditions.append(Person.age >= min_age)
    if max_age is not None:
        conditions.append(Person.age <= max_age)
    if email_domain and email_domain.strip():
        conditions.append(contains_ci(Person.email, email_domain))
    return conditions


class SortField(str, Enum):
    NAME = "name"
    AGE = "age"
    EMAIL = "email"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortField":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.NAME

    @property
    def column(self):
        return {
            SortField.NAME: Person.name,
            SortField.AGE: Person.age,
            SortField.EMAIL: Person.email,
        }[self]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortDirection":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ASC

    def apply(self, column) -> ColumnElement:
        return column.desc() if self is SortDirection.DESC else column.asc()


def resolve_ordering(sort_by: Optional[str],
                     sort_direction: Optional[str]) -> Tuple[ColumnElement, ...]:
    """ORDER BY clauses for a sort request; ties fall back to the primary key."""
    field = SortField.parse(sort_by)
    direction = SortDirection.parse(sort_direction)
    return direction.apply(field.column), direction.apply(Person.id)


def page_offset(page_number: int, page_size: int) -> int:
    return (page_number - 1) * page_size
