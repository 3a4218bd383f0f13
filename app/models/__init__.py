"""ORM models."""
from app.models.exercise import Exercise

__all__ = ["Exercise"]
