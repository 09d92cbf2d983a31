"""Role domain entity.

Roles are a small, near-static set ("organizer", "participant", "viewer")
created by a one-time seeding step and never mutated at runtime.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Role:
    """Named membership category conferring a fixed permission set.

    Attributes:
        id: Opaque role identifier.
        name: Unique role name (lowercase, matches policy fact literals).
    """

    id: str
    name: str
