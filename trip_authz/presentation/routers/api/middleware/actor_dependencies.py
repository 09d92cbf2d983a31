"""Actor identity dependencies.

Authentication happens upstream (API gateway / session layer). The
authenticated user id arrives in the trusted ``X-Actor-Id`` header and
the optional session id in ``X-Session-Id``. A missing header means no
authenticated actor; the authorization gateway turns that into 401.

Usage:
    @router.get("/me")
    async def me(actor: CurrentActor):
        return {"user_id": actor.user_id if actor else None}
"""

from typing import Annotated

from fastapi import Depends, Header

from trip_authz.domain.value_objects import Actor


async def get_current_actor(
    x_actor_id: Annotated[str | None, Header()] = None,
    x_session_id: Annotated[str | None, Header()] = None,
) -> Actor | None:
    """Build the request actor from upstream identity headers.

    Returns:
        Actor, or None when the request is unauthenticated.
    """
    if not x_actor_id:
        return None
    return Actor(user_id=x_actor_id, session_id=x_session_id or None)


CurrentActor = Annotated[Actor | None, Depends(get_current_actor)]
