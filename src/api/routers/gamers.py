"""The Gamers managing API: list, fetch, create, update and delete gamer records."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_gamer_service
from src.api.error_handlers import server_error_response
from src.api.models import (
    CreateGamerRequest,
    DeleteGamerRequest,
    ErrorResponse,
    GamerPayload,
    GamerResponse,
    GetGamerRequest,
    UpdateGamerRequest,
)
from src.services.gamer_service import GamerService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Gamers"])
ServiceDep = Annotated[GamerService, Depends(get_gamer_service)]

NOT_FOUND = {404: {"description": "The Gamer was not found"}}
SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Some server error"}}


@router.get(
    "",
    response_model=list[GamerResponse],
    summary="Returns the list of all the Gamers",
    response_description="The list of the Gamers",
)
def list_gamers(service: ServiceDep) -> list[GamerResponse]:
    return service.list_gamers()


@router.get(
    "/{gamer_id}",
    response_model=GamerResponse,
    summary="Get the Gamer by id",
    response_description="The Gamer description by id",
    responses=NOT_FOUND,
)
def get_gamer(gamer_id: str, service: ServiceDep) -> GamerResponse:
    return service.get_gamer(GetGamerRequest(gamer_id=gamer_id))


@router.post(
    "",
    response_model=GamerResponse,
    summary="Create a new Gamer",
    response_description="The Gamer was successfully created",
    responses=SERVER_ERROR,
)
def create_gamer(payload: GamerPayload, service: ServiceDep) -> GamerResponse | Response:
    try:
        return service.create_gamer(CreateGamerRequest(fields=payload.to_fields()))
    except Exception as exc:
        logger.exception("Creating gamer failed")
        return server_error_response(exc)


@router.put(
    "/{gamer_id}",
    response_model=GamerResponse | None,
    summary="Update the Gamer by the id",
    response_description="The Gamer was updated (null if no Gamer has this id)",
    responses=SERVER_ERROR,
)
def update_gamer(
    gamer_id: str, payload: GamerPayload, service: ServiceDep
) -> GamerResponse | Response | None:
    try:
        return service.update_gamer(
            UpdateGamerRequest(gamer_id=gamer_id, fields=payload.to_fields())
        )
    except Exception as exc:
        logger.exception("Updating gamer %s failed", gamer_id)
        return server_error_response(exc)


@router.delete(
    "/{gamer_id}",
    response_class=Response,
    summary="Remove the Gamer by id",
    response_description="The Gamer was deleted (or did not exist)",
)
def delete_gamer(gamer_id: str, service: ServiceDep) -> Response:
    service.delete_gamer(DeleteGamerRequest(gamer_id=gamer_id))
    return Response(status_code=status.HTTP_200_OK)
