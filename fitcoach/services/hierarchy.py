# fitcoach/services/hierarchy.py
"""
Create / read / update / delete for every level of a Program tree.

Every operation resolves the ancestor chain through the guard first, so a
node is only reachable under its real parents and only the owning trainer
gets past ``require_ownership``. Payloads are validated before anything is
written, and each write operation ends in exactly one commit.

Deletes go through the explicit ``cascade_delete_*`` functions below. They
remove the deepest level first and flush after each level, inside the
request's single transaction, so a failure rolls the whole subtree back.
"""

from datetime import datetime
from typing import List

from flask import current_app
from sqlalchemy.exc import IntegrityError

from .. import db
from ..errors import DuplicateKey, Internal
from ..guard import Caller, EntityRef, require_ownership
from ..models import Exercise, Program, TrainingDay, WorkoutSet
from ..validation import clean_exercise, clean_program, clean_set, clean_training_day


# ------------------------------
# Helpers
# ------------------------------
def _commit(duplicate: DuplicateKey = None) -> None:
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        if duplicate is not None:
            raise duplicate
        raise Internal(f"Database integrity error: {e.orig}") from e


def _touch(program: Program) -> None:
    program.updated_at = datetime.utcnow()


def _duplicate_day(day_number: int) -> DuplicateKey:
    return DuplicateKey(
        "dayNumber", f"Training day {day_number} already exists in this program"
    )


def _duplicate_exercise(name: str) -> DuplicateKey:
    return DuplicateKey("name", f"Exercise '{name}' already exists in this training day")


def _ensure_unique_day(program_id: int, day_number: int, exclude_id: int = None) -> None:
    q = TrainingDay.query.filter_by(program_id=program_id, day_number=day_number)
    if exclude_id is not None:
        q = q.filter(TrainingDay.id != exclude_id)
    if q.first() is not None:
        raise _duplicate_day(day_number)


def _ensure_unique_exercise(training_day_id: int, name: str, exclude_id: int = None) -> None:
    q = Exercise.query.filter_by(training_day_id=training_day_id, name=name)
    if exclude_id is not None:
        q = q.filter(Exercise.id != exclude_id)
    if q.first() is not None:
        raise _duplicate_exercise(name)


# ------------------------------
# Cascade delete (no commit; callers own the transaction)
# ------------------------------
def delete_set(workout_set: WorkoutSet) -> None:
    db.session.delete(workout_set)
    db.session.flush()


def cascade_delete_exercise(exercise: Exercise) -> None:
    WorkoutSet.query.filter_by(exercise_id=exercise.id).delete(synchronize_session=False)
    db.session.delete(exercise)
    db.session.flush()


def cascade_delete_training_day(training_day: TrainingDay) -> None:
    for exercise in Exercise.query.filter_by(training_day_id=training_day.id).all():
        cascade_delete_exercise(exercise)
    db.session.delete(training_day)
    db.session.flush()


def cascade_delete_program(program: Program) -> None:
    for training_day in TrainingDay.query.filter_by(program_id=program.id).all():
        cascade_delete_training_day(training_day)
    # assignment rows go with the program through the secondary relationship
    db.session.delete(program)
    db.session.flush()


# ------------------------------
# Programs
# ------------------------------
def create_program(caller: Caller, data) -> Program:
    fields = clean_program(data)
    program = Program(trainer_id=caller.id, **fields)
    db.session.add(program)
    _commit()
    current_app.logger.info(f"[programs] created program_id={program.id} trainer_id={caller.id}")
    return program


def list_programs(caller: Caller) -> List[Program]:
    return Program.query.filter_by(trainer_id=caller.id).order_by(Program.id).all()


def get_program(caller: Caller, program_id: int) -> Program:
    return require_ownership(caller, EntityRef(program_id)).program


def update_program(caller: Caller, program_id: int, data) -> Program:
    program = require_ownership(caller, EntityRef(program_id)).program
    fields = clean_program(data, partial=True)
    for attr, value in fields.items():
        setattr(program, attr, value)
    _commit()
    return program


def delete_program(caller: Caller, program_id: int) -> None:
    program = require_ownership(caller, EntityRef(program_id)).program
    cascade_delete_program(program)
    _commit()
    current_app.logger.info(f"[programs] deleted program_id={program_id} trainer_id={caller.id}")


# ------------------------------
# Training days
# ------------------------------
def create_training_day(caller: Caller, program_id: int, data) -> TrainingDay:
    program = require_ownership(caller, EntityRef(program_id)).program
    fields = clean_training_day(data)
    _ensure_unique_day(program.id, fields["day_number"])

    training_day = TrainingDay(program_id=program.id, **fields)
    db.session.add(training_day)
    _touch(program)
    _commit(_duplicate_day(fields["day_number"]))
    return training_day


def list_training_days(caller: Caller, program_id: int) -> List[TrainingDay]:
    return list(require_ownership(caller, EntityRef(program_id)).program.training_days)


def get_training_day(caller: Caller, program_id: int, training_day_id: int) -> TrainingDay:
    return require_ownership(caller, EntityRef(program_id, training_day_id)).training_day


def update_training_day(caller: Caller, program_id: int, training_day_id: int, data) -> TrainingDay:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id))
    training_day = chain.training_day
    fields = clean_training_day(data, partial=True)

    day_number = fields.get("day_number")
    if day_number is not None and day_number != training_day.day_number:
        _ensure_unique_day(chain.program.id, day_number, exclude_id=training_day.id)
        training_day.day_number = day_number
        _touch(chain.program)

    _commit(_duplicate_day(day_number) if day_number is not None else None)
    return training_day


def delete_training_day(caller: Caller, program_id: int, training_day_id: int) -> None:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id))
    cascade_delete_training_day(chain.training_day)
    _touch(chain.program)
    _commit()


# ------------------------------
# Exercises
# ------------------------------
def create_exercise(caller: Caller, program_id: int, training_day_id: int, data) -> Exercise:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id))
    fields = clean_exercise(data)
    _ensure_unique_exercise(chain.training_day.id, fields["name"])

    exercise = Exercise(training_day_id=chain.training_day.id, **fields)
    db.session.add(exercise)
    _touch(chain.program)
    _commit(_duplicate_exercise(fields["name"]))
    return exercise


def list_exercises(caller: Caller, program_id: int, training_day_id: int) -> List[Exercise]:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id))
    return list(chain.training_day.exercises)


def get_exercise(caller: Caller, program_id: int, training_day_id: int, exercise_id: int) -> Exercise:
    return require_ownership(caller, EntityRef(program_id, training_day_id, exercise_id)).exercise


def update_exercise(caller: Caller, program_id: int, training_day_id: int, exercise_id: int, data) -> Exercise:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id, exercise_id))
    exercise = chain.exercise
    fields = clean_exercise(data, partial=True)

    name = fields.get("name")
    if name is not None and name != exercise.name:
        _ensure_unique_exercise(chain.training_day.id, name, exclude_id=exercise.id)
        exercise.name = name
        _touch(chain.program)

    _commit(_duplicate_exercise(name) if name is not None else None)
    return exercise


def delete_exercise(caller: Caller, program_id: int, training_day_id: int, exercise_id: int) -> None:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id, exercise_id))
    cascade_delete_exercise(chain.exercise)
    _touch(chain.program)
    _commit()


# ------------------------------
# Sets
# ------------------------------
def create_set(caller: Caller, program_id: int, training_day_id: int, exercise_id: int, data) -> WorkoutSet:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id, exercise_id))
    fields = clean_set(data)

    workout_set = WorkoutSet(exercise_id=chain.exercise.id, **fields)
    db.session.add(workout_set)
    _touch(chain.program)
    _commit()
    return workout_set


def list_sets(caller: Caller, program_id: int, training_day_id: int, exercise_id: int) -> List[WorkoutSet]:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id, exercise_id))
    return list(chain.exercise.sets)


def get_set(caller: Caller, program_id: int, training_day_id: int, exercise_id: int, set_id: int) -> WorkoutSet:
    ref = EntityRef(program_id, training_day_id, exercise_id, set_id)
    return require_ownership(caller, ref).workout_set


def update_set(caller: Caller, program_id: int, training_day_id: int, exercise_id: int, set_id: int, data) -> WorkoutSet:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id, exercise_id, set_id))
    fields = clean_set(data, partial=True)
    for attr, value in fields.items():
        setattr(chain.workout_set, attr, value)
    if fields:
        _touch(chain.program)
    _commit()
    return chain.workout_set


def delete_workout_set(caller: Caller, program_id: int, training_day_id: int, exercise_id: int, set_id: int) -> None:
    chain = require_ownership(caller, EntityRef(program_id, training_day_id, exercise_id, set_id))
    delete_set(chain.workout_set)
    _touch(chain.program)
    _commit()
