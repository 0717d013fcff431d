"""
app/api/routers package marker.
"""

from app.api.routers.scheme_import import router as scheme_import_router

__all__ = [
    "scheme_import_router",
]
