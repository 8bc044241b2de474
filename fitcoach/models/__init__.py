from .user import User, ROLE_TRAINER, ROLE_USER, ROLES
from .program import Program, TrainingDay, Exercise, WorkoutSet, program_assignments

__all__ = [
    "User",
    "ROLE_TRAINER",
    "ROLE_USER",
    "ROLES",
    "Program",
    "TrainingDay",
    "Exercise",
    "WorkoutSet",
    "program_assignments",
]
