from sqlalchemy import Column, Float, Integer, String, Text

from app.db.database import Base
from app.ml.planning.types import ExerciseRecord


class Exercise(Base):
    """Catalog exercise row. The service only reads this table."""

    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    muscle_group = Column(String(100), nullable=True)
    target = Column(String(100), nullable=True, index=True)
    secondary_muscles = Column(Text, nullable=True)
    equipment = Column(String(100), nullable=True)
    difficulty = Column(String(50), nullable=True)
    duration_min = Column(Float, nullable=True)
    external_id = Column(String(100), nullable=True)

    def to_record(self) -> ExerciseRecord:
        return ExerciseRecord.from_mapping(
            {
                "id": self.id,
                "name": self.name,
                "muscle_group": self.muscle_group,
                "target": self.target,
                "secondary_muscles": self.secondary_muscles,
                "equipment": self.equipment,
                "difficulty": self.difficulty,
                "duration_min": self.duration_min,
                "external_id": self.external_id,
            }
        )

    def __repr__(self) -> str:
        return f"<Exercise {self.id} {self.name!r} target={self.target!r}>"
