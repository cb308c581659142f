"""
Personal record (PR) detection.

A set beats another set of the same movement when it is heavier, or equally
heavy with more reps. Volume (weight x reps) is never considered: a lighter
set with more reps does not beat a heavier one.

Everything here is pure; callers supply the history (typically every set of
the user's completed workouts) and get new values back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol

log = logging.getLogger(__name__)


class SetLike(Protocol):
    weight: float
    reps: int


@dataclass(frozen=True, slots=True)
class LoggedSet:
    movement_id: int
    weight: float
    reps: int
    movement_name: str = ""

    @classmethod
    def of(cls, row) -> "LoggedSet":
        """From any set-shaped object, e.g. a WorkoutSet row with its movement loaded."""
        movement = getattr(row, "movement", None)
        return cls(
            movement_id=row.movement_id,
            weight=row.weight,
            reps=row.reps,
            movement_name=movement.name if movement is not None else "",
        )


@dataclass(frozen=True, slots=True)
class BestSet:
    weight: float
    reps: int


@dataclass(frozen=True, slots=True)
class PersonalRecord:
    movement_id: int
    movement_name: str
    best_set: BestSet


@dataclass(frozen=True, slots=True)
class PRCheck:
    is_pr: bool
    previous_best: PersonalRecord | None


def is_better_set(new: SetLike, old: SetLike) -> bool:
    """Weight first, reps only break ties. Equal sets are not better."""
    if new.weight > old.weight:
        return True
    if new.weight == old.weight and new.reps > old.reps:
        return True
    return False


def build_records(history: Iterable[LoggedSet]) -> dict[int, PersonalRecord]:
    """
    Best set per movement over ``history``.

    On ties the set seen first is kept. Movements without history are
    absent from the result.
    """
    records: dict[int, PersonalRecord] = {}
    for s in history:
        existing = records.get(s.movement_id)
        if existing is None:
            records[s.movement_id] = PersonalRecord(
                movement_id=s.movement_id,
                movement_name=s.movement_name,
                best_set=BestSet(weight=s.weight, reps=s.reps),
            )
        elif is_better_set(s, existing.best_set):
            records[s.movement_id] = PersonalRecord(
                movement_id=existing.movement_id,
                movement_name=existing.movement_name,
                best_set=BestSet(weight=s.weight, reps=s.reps),
            )
    return records


def check_for_pr(new_set: LoggedSet, records: dict[int, PersonalRecord]) -> PRCheck:
    previous_best = records.get(new_set.movement_id)
    if previous_best is None:
        # first set ever logged for this movement
        return PRCheck(is_pr=True, previous_best=None)
    return PRCheck(
        is_pr=is_better_set(new_set, previous_best.best_set),
        previous_best=previous_best,
    )


def should_announce(
    new_set: LoggedSet,
    records: dict[int, PersonalRecord],
    session_sets: Iterable[LoggedSet],
) -> bool:
    """
    True when ``new_set`` is a PR against history and also strictly better
    than every earlier set of the same movement in the current session.
    """
    if not check_for_pr(new_set, records).is_pr:
        return False
    for earlier in session_sets:
        if earlier.movement_id != new_set.movement_id:
            continue
        if not is_better_set(new_set, earlier):
            return False
    return True


@dataclass
class SessionBestTracker:
    """
    Remembers the best set per movement inside one active workout so a
    historical PR is announced once, not on every following set.
    """
    _best: dict[int, LoggedSet] = field(default_factory=dict)

    def best_for(self, movement_id: int) -> LoggedSet | None:
        return self._best.get(movement_id)

    def announce(self, new_set: LoggedSet, records: dict[int, PersonalRecord]) -> bool:
        current = self._best.get(new_set.movement_id)
        improves_session = current is None or is_better_set(new_set, current)
        if improves_session:
            self._best[new_set.movement_id] = new_set
        result = improves_session and check_for_pr(new_set, records).is_pr
        if result:
            log.info("new PR movement=%s weight=%s reps=%s",
                     new_set.movement_id, new_set.weight, new_set.reps)
        return result

    @classmethod
    def from_sets(cls, sets: Iterable[LoggedSet]) -> "SessionBestTracker":
        tracker = cls()
        for s in sets:
            current = tracker._best.get(s.movement_id)
            if current is None or is_better_set(s, current):
                tracker._best[s.movement_id] = s
        return tracker
