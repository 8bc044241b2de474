# fitcoach/services/assignment.py

from flask import current_app

from .. import db
from ..errors import NotFound, ValidationError
from ..guard import Caller, require_assignment
from ..models import Program, User
from ..validation import id_in_range


def _owned_program(caller: Caller, program_id: int) -> Program:
    # Not owned reads as absent here, matching the original assign route.
    program = None
    if id_in_range(program_id):
        program = Program.query.filter_by(id=program_id, trainer_id=caller.id).first()
    if not program:
        raise NotFound("Program")
    return program


def assign(caller: Caller, program_id: int, user_id: int) -> Program:
    """Add ``user_id`` to the program's assigned users. Re-assigning is a no-op."""
    program = _owned_program(caller, program_id)

    user = db.session.get(User, user_id)
    if not user:
        raise NotFound("User")

    if not program.is_assigned(user.id):
        program.assigned_users.append(user)
        db.session.commit()
        current_app.logger.info(f"[assign] program_id={program.id} user_id={user.id}")

    return program


def unassign(caller: Caller, program_id: int, user_id: int) -> Program:
    program = _owned_program(caller, program_id)

    remaining = [u for u in program.assigned_users if u.id != user_id]
    if len(remaining) != len(program.assigned_users):
        program.assigned_users = remaining
        db.session.commit()
        current_app.logger.info(f"[unassign] program_id={program.id} user_id={user_id}")

    return program


def list_assigned_programs(user_id: int, page: int, page_size: int):
    """
    One page of the programs assigned to ``user_id``, oldest first.

    Returns the Flask-SQLAlchemy pagination object (``items``, ``total``,
    ``pages``, ``page``).
    """
    errors = []
    if page is None or page < 1:
        errors.append({"field": "page", "message": "page must be a positive integer"})
    if page_size is None or page_size < 1:
        errors.append({"field": "limit", "message": "limit must be a positive integer"})
    if errors:
        raise ValidationError(errors)

    page_size = min(page_size, current_app.config.get("MAX_PAGE_SIZE", 100))

    return (
        Program.query.filter(Program.assigned_users.any(User.id == user_id))
        .order_by(Program.id)
        .paginate(page=page, per_page=page_size, error_out=False)
    )


def get_assigned_program(caller: Caller, program_id: int) -> Program:
    return require_assignment(caller, program_id)
