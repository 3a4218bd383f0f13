"""
Workout Planning Tools Package

Command-line tools for working with the workout plan engine outside the API.

Core modules:
- plan_cli: Generate plans from a JSON catalog or the database, show focus splits
"""

__version__ = "1.0.0"
