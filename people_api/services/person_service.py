# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for people: CRUD plus filtered, sorted, paged search."""
from typing import Any, Dict, List, Optional

from people_api.core.logging import get_logger
from people_api.metrics import PEOPLE_CREATED, PEOPLE_DELETED, PEOPLE_SEARCH_LATENCY, PEOPLE_UPDATED
from people_api.repositories.person_repository import PersonRepository
from people_api.schemas import PagedPeople, PersonIn, PersonOut, PersonSearch

logger = get_logger(__name__)


class PersonService:
    def __init__(self, repo: PersonRepository):
        self._repo = repo

    def search(self, criteria: PersonSearch) -> PagedPeople:
        """Filter, count, sort and page in that order.

        ``total_count`` always reflects the whole filtered set. A page past
        the end comes back empty with its metadata intact.
        """
        logger.info("Searching people with filters: %s", criteria.model_dump())
        with PEOPLE_SEARCH_LATENCY.time():
            total, rows = self._repo.search(
                name=criteria.name,
                min_age=criteria.min_age,
                max_age=criteria.max_age,
                email_domain=criteria.email_domain,
                sort_by=criteria.sort_by,
                sort_direction=criteria.sort_direction,
                page_number=criteria.page_number,
                page_size=criteria.page_size,
            )
        return PagedPeople(
            items=[PersonOut(**r) for r in rows],
            total_count=total,
            page_number=criteria.page_number,
            page_size=criteria.page_size,
        )

    def get_person(self, person_id: int) -> Optional[Dict[str, Any]]:
        logger.info("Getting person by id=%s", person_id)
        return self._repo.get(person_id)

    def create_person(self, data: PersonIn) -> Dict[str, Any]:
        result = self._repo.create(data.name, data.age, str(data.email))
        PEOPLE_CREATED.inc()
        logger.info("Person created id=%s email=%s", result["id"], result["email"])
        return result

    def update_person(self, person_id: int, data: PersonIn) -> Optional[Dict[str, Any]]:
        logger.info("Updating person id=%s", person_id)
        result = self._repo.update(person_id, {
            "name": data.name, "age": data.age, "email": str(data.email),
        })
        if result is not None:
            PEOPLE_UPDATED.inc()
        return result

    def delete_person(self, person_id: int) -> bool:
        logger.info("Deleting person id=%s", person_id)
        deleted = self._repo.delete(person_id)
        if deleted:
            PEOPLE_DELETED.inc()
        return deleted

    def list_by_age_range(self, min_age: int, max_age: int) -> List[Dict[str, Any]]:
        logger.info("Getting people by age range %s-%s", min_age, max_age)
        return self._repo.list_by_age_range(min_age, max_age)

    def exists(self, person_id: int) -> bool:
        return self._repo.exists(person_id)

    def count_by_email_domain(self, domain: str) -> int:
        logger.info("Counting people by email domain=%s", domain)
        return self._repo.count_by_email_domain(domain)
