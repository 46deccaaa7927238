"""
FastAPI router for the heroes bounded context.

All routes delegate to HeroService. No business logic here.
JSON shape checks are handled by Pydantic schemas, field rules by the
domain validator, and error mapping by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Path, Request, Response, status

from app.application.heroes.hero_service import HeroService
from app.domain.heroes.entities import MAX_KEY, Hero
from app.interfaces.heroes.dependencies import get_hero_service
from app.interfaces.heroes.preconditions import resolve_expected_version
from app.interfaces.heroes.schemas import (
    HeroCreateRequest,
    HeroResponse,
    HeroUpdateRequest,
    ProblemResponse,
)

router = APIRouter(prefix="/heroes", tags=["heroes"])

PROBLEM = {"model": ProblemResponse}


def _with_etag(response: Response, hero: Hero) -> HeroResponse:
    response.headers["ETag"] = hero.etag
    return HeroResponse.from_entity(hero)


@router.post(
    "",
    response_model=HeroResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: PROBLEM, 409: PROBLEM},
    summary="Create a hero",
    description="Store a new hero. id, first_seen and version are assigned by the server.",
)
def create_hero(
    payload: HeroCreateRequest,
    request: Request,
    response: Response,
    service: HeroService = Depends(get_hero_service),
) -> HeroResponse:
    """Create a hero and point Location at it."""
    hero = service.create_hero(payload.to_payload())
    response.headers["Location"] = str(request.url_for("get_hero", hero_id=hero.id))
    return _with_etag(response, hero)


@router.get(
    "",
    response_model=list[HeroResponse],
    summary="List heroes",
    description="Return every hero ordered by id.",
)
def list_heroes(
    service: HeroService = Depends(get_hero_service),
) -> list[HeroResponse]:
    """List all heroes."""
    return [HeroResponse.from_entity(hero) for hero in service.list_heroes()]


@router.post(
    "/cleanup",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove all heroes",
)
def cleanup_heroes(
    service: HeroService = Depends(get_hero_service),
) -> Response:
    """Delete every hero."""
    service.delete_all_heroes()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{hero_id}",
    response_model=HeroResponse,
    responses={404: PROBLEM},
    summary="Get a hero",
)
def get_hero(
    response: Response,
    hero_id: int = Path(ge=1, le=MAX_KEY),
    service: HeroService = Depends(get_hero_service),
) -> HeroResponse:
    """Get a hero by id. The ETag carries its current version."""
    return _with_etag(response, service.get_hero(hero_id))


@router.api_route(
    "/{hero_id}",
    methods=["PUT", "PATCH"],
    response_model=HeroResponse,
    responses={400: PROBLEM, 404: PROBLEM, 409: PROBLEM, 412: PROBLEM, 428: PROBLEM},
    summary="Update a hero",
    description=(
        "Apply the submitted fields if the hero's version still equals the "
        "one given in If-Match. Fields left out are not changed."
    ),
)
def update_hero(
    payload: HeroUpdateRequest,
    response: Response,
    hero_id: int = Path(ge=1, le=MAX_KEY),
    if_match: Optional[str] = Header(default=None),
    service: HeroService = Depends(get_hero_service),
) -> HeroResponse:
    """Update a hero under optimistic concurrency control."""
    expected_version = resolve_expected_version(hero_id, if_match, payload.version)
    hero = service.update_hero(hero_id, expected_version, payload.to_payload())
    return _with_etag(response, hero)


@router.delete(
    "/{hero_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: PROBLEM},
    summary="Delete a hero",
)
def delete_hero(
    hero_id: int = Path(ge=1, le=MAX_KEY),
    service: HeroService = Depends(get_hero_service),
) -> Response:
    """Hard-delete a hero."""
    service.delete_hero(hero_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
