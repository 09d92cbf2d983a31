"""Request/response schemas for API endpoints.

Schemas are kept separate from domain entities (HTTP-layer concerns only).
"""

from trip_authz.schemas.participant_schemas import (
    ParticipantAddRequest,
    ParticipantChangeResponse,
    ParticipantListResponse,
    ParticipantResponse,
    ParticipantRoleUpdateRequest,
)

__all__ = [
    "ParticipantAddRequest",
    "ParticipantChangeResponse",
    "ParticipantListResponse",
    "ParticipantResponse",
    "ParticipantRoleUpdateRequest",
]
