"""Planning package for the workout suggestion service.

This package contains the weekly plan synthesis engine: pool sampling,
day allocation, coverage repair and validation.
"""

__all__ = ["planning"]
