# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: people CRUD, search, age range, domain counts."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from people_api.core.config import settings
from people_api.core.dependencies import get_person_service, require_role
from people_api.schemas import DomainCount, ExistsOut, PagedPeople, PersonIn, PersonOut, PersonSearch
from people_api.services.person_service import PersonService

router = APIRouter(prefix="/api/v1", tags=["People"])


def _check_age_bounds(min_age: Optional[int], max_age: Optional[int]) -> None:
    if min_age is not None and max_age is not None and min_age > max_age:
        raise HTTPException(status_code=422, detail="min_age must not be greater than max_age")


@router.get("/people", response_model=PagedPeople)
def search_people(
    name: Optional[str] = Query(default=None, max_length=100),
    min_age: Optional[int] = Query(default=None, ge=0, le=150),
    max_age: Optional[int] = Query(default=None, ge=0, le=150),
    email_domain: Optional[str] = Query(default=None, max_length=100),
    sort_by: str = Query(default="Name", description="Name, Age or Email"),
    sort_direction: str = Query(default="asc", description="asc or desc"),
    page_number: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
    service: PersonService = Depends(get_person_service),
):
    _check_age_bounds(min_age, max_age)
    criteria = PersonSearch(
        name=name, min_age=min_age, max_age=max_age, email_domain=email_domain,
        sort_by=sort_by, sort_direction=sort_direction,
        page_number=page_number, page_size=page_size,
    )
    return service.search(criteria)


@router.get("/people/age-range", response_model=List[PersonOut])
def list_people_by_age_range(
    min_age: int = Query(..., ge=0, le=150),
    max_age: int = Query(..., ge=0, le=150),
    service: PersonService = Depends(get_person_service),
):
    _check_age_bounds(min_age, max_age)
    return [PersonOut(**p) for p in service.list_by_age_range(min_age, max_age)]


@router.get("/people/count", response_model=DomainCount)
def count_people_by_email_domain(
    email_domain: str = Query(..., min_length=1, max_length=100),
    service: PersonService = Depends(get_person_service),
):
    return DomainCount(email_domain=email_domain,
                       count=service.count_by_email_domain(email_domain))


@router.get("/people/{person_id}", response_model=PersonOut)
def get_person(person_id: int, service: PersonService = Depends(get_person_service)):
    result = service.get_person(person_id)
    if not result:
        raise HTTPException(status_code=404, detail=f"Person with ID {person_id} not found")
    return PersonOut(**result)


@router.get("/people/{person_id}/exists", response_model=ExistsOut)
def person_exists(person_id: int, service: PersonService = Depends(get_person_service)):
    return ExistsOut(id=person_id, exists=service.exists(person_id))


@router.post("/people", status_code=201, response_model=PersonOut)
def create_person(body: PersonIn, response: Response,
                  service: PersonService = Depends(get_person_service)):
    result = service.create_person(body)
    response.headers["Location"] = f"/api/v1/people/{result['id']}"
    return PersonOut(**result)


@router.put("/people/{person_id}", response_model=PersonOut)
def update_person(person_id: int, body: PersonIn,
                  service: PersonService = Depends(get_person_service)):
    result = service.update_person(person_id, body)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Person with ID {person_id} not found")
    return PersonOut(**result)


@router.delete("/people/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_person(
    person_id: int,
    service: PersonService = Depends(get_person_service),
    _admin: dict = Depends(require_role(settings.ADMIN_ROLE)),
):
    if not service.delete_person(person_id):
        raise HTTPException(status_code=404, detail=f"Person with ID {person_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
