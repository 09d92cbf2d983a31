"""Ordered fact change accumulator.

A FactBatch collects inserts and deletes in call order. Adjacent operations
of the same kind coalesce into one change set, so

    batch.delete(p1); batch.delete(p2); batch.insert(f1); batch.delete(p3)

yields ``[deletes(p1, p2), inserts(f1), deletes(p3)]``. The policy service
applies change sets in list order, which is what keeps a role change
(delete old, insert new) from ever being reordered.
"""

from dataclasses import dataclass, field
from enum import Enum

from trip_authz.domain.value_objects.policy_fact import FactPattern, PolicyFact


class FactChangeKind(str, Enum):
    """Kind of a change set; values are the wire keys."""

    INSERTS = "inserts"
    DELETES = "deletes"


@dataclass(slots=True)
class FactChangeSet:
    """Run of same-kind operations."""

    kind: FactChangeKind
    items: list[PolicyFact | FactPattern] = field(default_factory=list)


class FactBatch:
    """Mutable builder handed to ``PolicyClient.batch`` callbacks."""

    def __init__(self) -> None:
        self._changes: list[FactChangeSet] = []

    def insert(self, fact: PolicyFact) -> None:
        """Queue a fact insert."""
        self._append(FactChangeKind.INSERTS, fact)

    def delete(self, pattern: FactPattern | PolicyFact) -> None:
        """Queue a delete of every fact matching ``pattern``."""
        if isinstance(pattern, PolicyFact):
            pattern = FactPattern.from_fact(pattern)
        self._append(FactChangeKind.DELETES, pattern)

    @property
    def changes(self) -> list[FactChangeSet]:
        return list(self._changes)

    @property
    def is_empty(self) -> bool:
        return not self._changes

    def _append(self, kind: FactChangeKind, item: PolicyFact | FactPattern) -> None:
        if self._changes and self._changes[-1].kind is kind:
            self._changes[-1].items.append(item)
        else:
            self._changes.append(FactChangeSet(kind=kind, items=[item]))
