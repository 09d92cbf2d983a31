"""Trip participants router.

Endpoints:
    GET    /api/v1/trips/{trip_id}/participants            - List members
    POST   /api/v1/trips/{trip_id}/participants            - Add a member
    PATCH  /api/v1/trips/{trip_id}/participants/{user_id}  - Change a member's role
    DELETE /api/v1/trips/{trip_id}/participants/{user_id}  - Remove a member

Every route is guarded by ``require_permission`` before the service runs.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse

from trip_authz.application.services import ParticipantService
from trip_authz.core.container import get_participant_service
from trip_authz.core.result import Failure
from trip_authz.presentation.routers.api.middleware import require_permission
from trip_authz.presentation.routers.api.v1.errors import ErrorResponseBuilder
from trip_authz.schemas import (
    ParticipantAddRequest,
    ParticipantChangeResponse,
    ParticipantListResponse,
    ParticipantRoleUpdateRequest,
)


router = APIRouter(prefix="/trips/{trip_id}/participants", tags=["Participants"])

TripId = Annotated[str, Path(min_length=1, description="Trip identifier")]
UserId = Annotated[str, Path(min_length=1, description="Member's user id")]
Service = Annotated[ParticipantService, Depends(get_participant_service)]


@router.get(
    "",
    response_model=ParticipantListResponse,
    summary="List participants",
    dependencies=[Depends(require_permission("Trip", "participants.list"))],
)
async def list_participants(
    request: Request,
    trip_id: TripId,
    service: Service,
) -> ParticipantListResponse | JSONResponse:
    """List a trip's members with their roles."""
    result = await service.list_participants(trip_id)
    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(result.error, request)
    return ParticipantListResponse.from_entities(trip_id, result.value)


@router.post(
    "",
    response_model=ParticipantChangeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add participant",
    dependencies=[Depends(require_permission("Trip", "participants.manage"))],
)
async def add_participant(
    request: Request,
    trip_id: TripId,
    data: ParticipantAddRequest,
    service: Service,
) -> ParticipantChangeResponse | JSONResponse:
    """Add a user to the trip, or change the role they already hold."""
    result = await service.add_participant(trip_id, data.user_id, data.role)
    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(result.error, request)
    return ParticipantChangeResponse.from_entity(result.value)


@router.patch(
    "/{user_id}",
    response_model=ParticipantChangeResponse,
    summary="Change participant role",
    dependencies=[Depends(require_permission("Trip", "participants.manage"))],
)
async def update_participant_role(
    request: Request,
    trip_id: TripId,
    user_id: UserId,
    data: ParticipantRoleUpdateRequest,
    service: Service,
) -> ParticipantChangeResponse | JSONResponse:
    """Change an existing member's role (404 if not a member)."""
    result = await service.update_participant_role(trip_id, user_id, data.role)
    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(result.error, request)
    return ParticipantChangeResponse.from_entity(result.value)


@router.delete(
    "/{user_id}",
    response_model=ParticipantChangeResponse,
    summary="Remove participant",
    dependencies=[Depends(require_permission("Trip", "participants.manage"))],
)
async def remove_participant(
    request: Request,
    trip_id: TripId,
    user_id: UserId,
    service: Service,
) -> ParticipantChangeResponse | JSONResponse:
    """Remove a member from the trip."""
    result = await service.remove_participant(trip_id, user_id)
    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(result.error, request)
    return ParticipantChangeResponse.from_entity(result.value)
