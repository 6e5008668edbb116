"""
People search & CRUD — service-level tests
===========================================
Run:  pytest test_person_service.py -v
"""
import math

import pytest
from sqlalchemy.exc import IntegrityError

from people_api.core.database import SessionLocal
from people_api.repositories.person_query import SortDirection, SortField, page_offset
from people_api.repositories.person_repository import PersonRepository
from people_api.schemas import PagedPeople, PersonIn, PersonSearch
from people_api.services.person_service import PersonService

SEED = [
    ("Alice", 25, "alice@gmail.com"),
    ("Bob", 30, "bob@yahoo.com"),
    ("Charlie", 35, "charlie@gmail.com"),
]


@pytest.fixture
def service():
    return PersonService(PersonRepository(SessionLocal))


@pytest.fixture
def seeded(service):
    return [service.create_person(PersonIn(name=n, age=a, email=e)) for n, a, e in SEED]


def _names(page: PagedPeople):
    return [p.name for p in page.items]


# ═══════════════════════════════════════════════════════════════════════════
# SORT / PAGE HELPERS
# ═══════════════════════════════════════════════════════════════════════════
class TestSortResolution:
    @pytest.mark.parametrize("raw,expected", [
        ("Name", SortField.NAME), ("AGE", SortField.AGE), ("email", SortField.EMAIL),
        (" Age ", SortField.AGE), ("salary", SortField.NAME), ("", SortField.NAME),
        (None, SortField.NAME),
    ])
    def test_sort_field_parse(self, raw, expected):
        assert SortField.parse(raw) is expected

    @pytest.mark.parametrize("raw,expected", [
        ("asc", SortDirection.ASC), ("DESC", SortDirection.DESC),
        ("Desc", SortDirection.DESC), ("sideways", SortDirection.ASC), (None, SortDirection.ASC),
    ])
    def test_sort_direction_parse(self, raw, expected):
        assert SortDirection.parse(raw) is expected

    def test_page_offset(self):
        assert page_offset(1, 10) == 0
        assert page_offset(3, 25) == 50


class TestPageMetadata:
    def test_derived_fields(self):
        page = PagedPeople(items=[], total_count=5, page_number=2, page_size=2)
        assert page.total_pages == 3
        assert page.has_previous_page is True
        assert page.has_next_page is True

    def test_last_page_has_no_next(self):
        page = PagedPeople(items=[], total_count=5, page_number=3, page_size=2)
        assert page.has_next_page is False

    def test_empty_result(self):
        page = PagedPeople(items=[], total_count=0, page_number=1, page_size=10)
        assert page.total_pages == 0
        assert page.has_previous_page is False
        assert page.has_next_page is False

    def test_serialised_output_includes_derived_fields(self):
        dumped = PagedPeople(items=[], total_count=11, page_number=1, page_size=10).model_dump()
        assert dumped["total_pages"] == 2
        assert dumped["has_next_page"] is True


# ═══════════════════════════════════════════════════════════════════════════
# SEARCH
# ═══════════════════════════════════════════════════════════════════════════
class TestSearch:
    def test_no_criteria_returns_everything_sorted_by_name(self, service, seeded):
        page = service.search(PersonSearch())
        assert _names(page) == ["Alice", "Bob", "Charlie"]
        assert page.total_count == 3

    def test_email_domain_filter(self, service, seeded):
        page = service.search(PersonSearch(email_domain="@gmail.com"))
        assert _names(page) == ["Alice", "Charlie"]
        assert page.total_count == 2

    def test_email_domain_is_case_insensitive(self, service, seeded):
        page = service.search(PersonSearch(email_domain="@GMAIL.COM"))
        assert page.total_count == 2

    def test_min_age_filter(self, service, seeded):
        page = service.search(PersonSearch(min_age=28))
        assert _names(page) == ["Bob", "Charlie"]
        assert page.total_count == 2

    def test_age_bounds_are_inclusive(self, service, seeded):
        page = service.search(PersonSearch(min_age=25, max_age=30))
        assert _names(page) == ["Alice", "Bob"]

    def test_inverted_age_bounds_match_nothing(self, service, seeded):
        page = service.search(PersonSearch(min_age=40, max_age=20))
        assert page.items == []
        assert page.total_count == 0

    def test_name_substring_case_insensitive(self, service, seeded):
        page = service.search(PersonSearch(name="LI"))
        assert _names(page) == ["Alice", "Charlie"]

    def test_name_match_folds_non_ascii_case(self, service, seeded):
        service.create_person(PersonIn(name="ÉMILE Ärger", age=44, email="emile@corp.fr"))
        page = service.search(PersonSearch(name="émile ärger"))
        assert _names(page) == ["ÉMILE Ärger"]
        assert page.total_count == 1

    def test_blank_criteria_are_ignored(self, service, seeded):
        page = service.search(PersonSearch(name="   ", email_domain=""))
        assert page.total_count == 3

    def test_wildcards_are_literal(self, service, seeded):
        assert service.search(PersonSearch(name="%")).total_count == 0
        assert service.search(PersonSearch(email_domain="_")).total_count == 0

    def test_criteria_combine_as_conjunction(self, service, seeded):
        page = service.search(PersonSearch(email_domain="gmail", min_age=30))
        assert _names(page) == ["Charlie"]

    def test_sort_by_age_desc(self, service, seeded):
        page = service.search(PersonSearch(sort_by="age", sort_direction="DESC"))
        assert [p.age for p in page.items] == [35, 30, 25]

    def test_sort_by_email(self, service, seeded):
        page = service.search(PersonSearch(sort_by="Email"))
        assert [p.email for p in page.items] == sorted(e for _, _, e in SEED)

    def test_unknown_sort_falls_back_to_name_asc(self, service, seeded):
        page = service.search(PersonSearch(sort_by="shoe_size", sort_direction="upward"))
        assert _names(page) == ["Alice", "Bob", "Charlie"]

    def test_second_page_of_five(self, service):
        for letter in "EDCBA":
            service.create_person(PersonIn(name=letter, age=20, email=f"{letter.lower()}@x.com"))
        page = service.search(PersonSearch(page_number=2, page_size=2, sort_by="Name"))
        assert _names(page) == ["C", "D"]
        assert page.total_count == 5
        assert page.total_pages == 3
        assert page.has_previous_page is True
        assert page.has_next_page is True

    def test_page_beyond_end_is_empty_with_metadata(self, service, seeded):
        page = service.search(PersonSearch(page_number=9, page_size=2))
        assert page.items == []
        assert page.total_count == 3
        assert page.total_pages == 2
        assert page.has_next_page is False

    def test_sort_holds_across_pages(self, service):
        for i, age in enumerate([44, 12, 87, 12, 60, 33, 5]):
            service.create_person(PersonIn(name=f"P{i}", age=age, email=f"p{i}@x.com"))
        ages = []
        for number in range(1, 4):
            page = service.search(PersonSearch(sort_by="Age", page_number=number, page_size=3))
            ages.extend(p.age for p in page.items)
        assert ages == sorted(ages)
        assert len(ages) == 7

    def test_total_pages_matches_ceiling(self, service):
        for i in range(7):
            service.create_person(PersonIn(name=f"N{i}", age=i, email=f"n{i}@x.com"))
        for size in (1, 2, 3, 7, 10):
            page = service.search(PersonSearch(page_size=size))
            assert page.total_pages == math.ceil(7 / size)
            assert page.total_count == 7


# ═══════════════════════════════════════════════════════════════════════════
# CRUD & SUPPLEMENTARY QUERIES
# ═══════════════════════════════════════════════════════════════════════════
class TestCrud:
    def test_create_then_get_round_trip(self, service):
        created = service.create_person(PersonIn(name="Dana", age=41, email="dana@corp.io"))
        fetched = service.get_person(created["id"])
        assert fetched == {"id": created["id"], "name": "Dana", "age": 41, "email": "dana@corp.io"}

    def test_get_missing_returns_none(self, service):
        assert service.get_person(999) is None

    def test_update_overwrites_all_fields(self, service, seeded):
        pid = seeded[0]["id"]
        result = service.update_person(pid, PersonIn(name="Alicia", age=26, email="alicia@gmail.com"))
        assert result == {"id": pid, "name": "Alicia", "age": 26, "email": "alicia@gmail.com"}
        assert service.get_person(pid)["name"] == "Alicia"

    def test_update_missing_returns_none_and_creates_nothing(self, service):
        assert service.update_person(1, PersonIn(name="X", age=1, email="x@x.com")) is None
        assert service.search(PersonSearch()).total_count == 0

    def test_delete_twice(self, service, seeded):
        pid = seeded[1]["id"]
        assert service.delete_person(pid) is True
        assert service.delete_person(pid) is False
        assert service.exists(pid) is False

    def test_delete_unknown_id_changes_nothing(self, service, seeded):
        assert service.delete_person(12345) is False
        assert service.delete_person(12345) is False
        assert service.search(PersonSearch()).total_count == 3

    def test_duplicate_email_propagates(self, service, seeded):
        with pytest.raises(IntegrityError):
            service.create_person(PersonIn(name="Alice 2", age=50, email="alice@gmail.com"))

    def test_exists(self, service, seeded):
        assert service.exists(seeded[0]["id"]) is True
        assert service.exists(0) is False

    def test_age_range_is_sorted_by_age(self, service, seeded):
        service.create_person(PersonIn(name="Zed", age=27, email="zed@x.com"))
        rows = service.list_by_age_range(25, 30)
        assert [r["age"] for r in rows] == [25, 27, 30]

    def test_count_by_email_domain(self, service, seeded):
        assert service.count_by_email_domain("@gmail.com") == 2
        assert service.count_by_email_domain("@YAHOO.com") == 1
        assert service.count_by_email_domain("@nonexisting.com") == 0
