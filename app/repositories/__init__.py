"""Repositories package."""
from app.repositories.exercise_repository import ExerciseRepository

__all__ = [
    "ExerciseRepository",
]
