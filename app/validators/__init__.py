"""
app/validators package marker.
"""

from app.validators.scheme_validator import SchemeRowValidator

__all__ = [
    "SchemeRowValidator",
]
