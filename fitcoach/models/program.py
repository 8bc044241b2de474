# fitcoach/models/program.py
from datetime import datetime
from .. import db


# Trainee <-> Program link. The composite key keeps assignedUsers a set.
program_assignments = db.Table(
    "program_assignments",
    db.Column("program_id", db.Integer, db.ForeignKey("programs.id"), primary_key=True),
    db.Column("user_id", db.Integer, db.ForeignKey("users.id"), primary_key=True),
    db.Column("assigned_at", db.DateTime, nullable=False, default=datetime.utcnow),
)


# -----------------------------
# Program (aggregate root)
# -----------------------------
class Program(db.Model):
    __tablename__ = "programs"

    id = db.Column(db.Integer, primary_key=True)
    trainer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    program_name = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Child collections are read-only: rows are created with an explicit
    # parent id and removed by the cascade_delete_* service functions.
    training_days = db.relationship(
        "TrainingDay", viewonly=True, order_by="TrainingDay.id", lazy="selectin"
    )
    assigned_users = db.relationship(
        "User", secondary=program_assignments, order_by="User.id", lazy="selectin"
    )
    trainer = db.relationship("User", foreign_keys=[trainer_id])

    def is_assigned(self, user_id: int) -> bool:
        return any(u.id == user_id for u in self.assigned_users)

    def to_dict(self, include_assignments: bool = True):
        data = {
            "id": self.id,
            "trainerId": self.trainer_id,
            "programName": self.program_name,
            "trainingDays": [d.to_dict() for d in self.training_days],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_assignments:
            data["assignedUsers"] = [u.id for u in self.assigned_users]
        return data


# -----------------------------
# Days, exercises, sets
# -----------------------------
class TrainingDay(db.Model):
    __tablename__ = "training_days"
    __table_args__ = (
        db.UniqueConstraint("program_id", "day_number", name="uq_training_day_number"),
    )

    id = db.Column(db.Integer, primary_key=True)
    program_id = db.Column(db.Integer, db.ForeignKey("programs.id"), nullable=False, index=True)
    day_number = db.Column(db.Integer, nullable=False)

    exercises = db.relationship(
        "Exercise", viewonly=True, order_by="Exercise.id", lazy="selectin"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "programId": self.program_id,
            "dayNumber": self.day_number,
            "exercises": [e.to_dict() for e in self.exercises],
        }


class Exercise(db.Model):
    __tablename__ = "exercises"
    __table_args__ = (
        db.UniqueConstraint("training_day_id", "name", name="uq_exercise_name"),
    )

    id = db.Column(db.Integer, primary_key=True)
    training_day_id = db.Column(
        db.Integer, db.ForeignKey("training_days.id"), nullable=False, index=True
    )
    name = db.Column(db.String(255), nullable=False)

    sets = db.relationship(
        "WorkoutSet", viewonly=True, order_by="WorkoutSet.id", lazy="selectin"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "trainingDayId": self.training_day_id,
            "name": self.name,
            "sets": [s.to_dict() for s in self.sets],
        }


class WorkoutSet(db.Model):
    __tablename__ = "sets"

    id = db.Column(db.Integer, primary_key=True)
    exercise_id = db.Column(db.Integer, db.ForeignKey("exercises.id"), nullable=False, index=True)
    reps = db.Column(db.Integer, nullable=False)
    weight = db.Column(db.Float, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "exerciseId": self.exercise_id,
            "reps": self.reps,
            "weight": float(self.weight) if self.weight is not None else None,
        }
