# fitcoach/guard.py
"""
Authorization guard.

Write access anywhere in a Program tree belongs to the trainer at its root.
``resolve_chain`` walks an entity reference down from the Program and
reports the first missing link; ``require_ownership`` then compares the
root's trainer with the caller.
"""

from dataclasses import dataclass
from functools import wraps
from typing import Iterable, NamedTuple, Optional

from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from .errors import Forbidden, NotFound, Unauthenticated
from .models import Exercise, Program, TrainingDay, WorkoutSet
from .validation import id_in_range


class Caller(NamedTuple):
    id: int
    role: str


def caller_from_claims(identity, claims) -> Caller:
    role = claims.get("role")
    try:
        user_id = int(identity)
    except (TypeError, ValueError):
        raise Unauthenticated()
    if not role:
        raise Unauthenticated()
    return Caller(id=user_id, role=role)


def current_caller() -> Caller:
    """Caller of the current request; the JWT must already be verified."""
    return caller_from_claims(get_jwt_identity(), get_jwt())


# ------------------------------
# Roles
# ------------------------------
def require_role(caller: Caller, allowed_roles: Iterable[str]) -> None:
    if caller.role not in allowed_roles:
        raise Forbidden()


def roles_required(*roles):
    """Route decorator: valid bearer token and one of ``roles``."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            require_role(current_caller(), roles)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


# ------------------------------
# Ownership chain
# ------------------------------
@dataclass(frozen=True)
class EntityRef:
    program_id: int
    training_day_id: Optional[int] = None
    exercise_id: Optional[int] = None
    set_id: Optional[int] = None


@dataclass
class OwnershipChain:
    program: Program
    training_day: Optional[TrainingDay] = None
    exercise: Optional[Exercise] = None
    workout_set: Optional[WorkoutSet] = None


def _find(model, entity: str, row_id: int, **parent):
    row = model.query.filter_by(id=row_id, **parent).first() if id_in_range(row_id) else None
    if row is None:
        raise NotFound(entity)
    return row


def resolve_chain(ref: EntityRef) -> OwnershipChain:
    chain = OwnershipChain(program=_find(Program, "Program", ref.program_id))

    if ref.training_day_id is None:
        return chain
    chain.training_day = _find(
        TrainingDay, "Training day", ref.training_day_id, program_id=chain.program.id
    )

    if ref.exercise_id is None:
        return chain
    chain.exercise = _find(
        Exercise, "Exercise", ref.exercise_id, training_day_id=chain.training_day.id
    )

    if ref.set_id is None:
        return chain
    chain.workout_set = _find(
        WorkoutSet, "Set", ref.set_id, exercise_id=chain.exercise.id
    )

    return chain


def require_ownership(caller: Caller, ref: EntityRef) -> OwnershipChain:
    chain = resolve_chain(ref)
    if chain.program.trainer_id != caller.id:
        raise Forbidden()
    return chain


def require_assignment(caller: Caller, program_id: int) -> Program:
    """Trainee read path: any authenticated role, but only assigned programs."""
    program = _find(Program, "Program", program_id)
    if not program.is_assigned(caller.id):
        raise NotFound("Program")
    return program
