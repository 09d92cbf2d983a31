"""Trip participant request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from trip_authz.domain.entities import Participant, ParticipantChange


# =============================================================================
# Request Schemas
# =============================================================================


class ParticipantAddRequest(BaseModel):
    """Add a user to a trip.

    Attributes:
        user_id: User to add.
        role: Role to grant.
    """

    model_config = ConfigDict(extra="forbid")

    user_id: str = Field(..., min_length=1, description="User to add")
    role: str = Field(
        ...,
        min_length=1,
        description="Role to grant",
        examples=["participant"],
    )


class ParticipantRoleUpdateRequest(BaseModel):
    """Change an existing member's role."""

    model_config = ConfigDict(extra="forbid")

    role: str = Field(
        ...,
        min_length=1,
        description="New role",
        examples=["viewer"],
    )


# =============================================================================
# Response Schemas
# =============================================================================


class ParticipantResponse(BaseModel):
    """One trip member."""

    user_id: str = Field(..., description="Member's user id")
    display_name: str = Field(..., description="Member's display name")
    role: str = Field(..., description="Member's role on the trip")
    joined_at: datetime = Field(..., description="When the current role was granted")

    @classmethod
    def from_entity(cls, participant: Participant) -> "ParticipantResponse":
        """Convert a Participant read model to a response."""
        return cls(
            user_id=participant.user_id,
            display_name=participant.display_name,
            role=participant.role_name,
            joined_at=participant.joined_at,
        )


class ParticipantListResponse(BaseModel):
    """Members of one trip."""

    trip_id: str = Field(..., description="Trip identifier")
    participants: list[ParticipantResponse] = Field(..., description="Trip members")
    total_count: int = Field(..., description="Number of members")

    @classmethod
    def from_entities(
        cls, trip_id: str, participants: list[Participant]
    ) -> "ParticipantListResponse":
        """Convert a list of Participant read models to a response."""
        return cls(
            trip_id=trip_id,
            participants=[ParticipantResponse.from_entity(p) for p in participants],
            total_count=len(participants),
        )


class ParticipantChangeResponse(BaseModel):
    """Outcome of a participant mutation.

    Attributes:
        trip_id: Trip whose membership changed.
        user_id: Affected user.
        role_id: Role held after the change (None after removal).
        previous_role_id: Role held before the change.
        policy_synced: False when the policy facts could not be written;
            the local change stands and reconciliation repairs the drift.
    """

    trip_id: str
    user_id: str
    role_id: str | None = None
    previous_role_id: str | None = None
    policy_synced: bool

    @classmethod
    def from_entity(cls, change: ParticipantChange) -> "ParticipantChangeResponse":
        """Convert a ParticipantChange to a response."""
        return cls(
            trip_id=change.trip_id,
            user_id=change.user_id,
            role_id=change.assignment.role_id if change.assignment else None,
            previous_role_id=change.previous_role_id,
            policy_synced=change.policy_synced,
        )
