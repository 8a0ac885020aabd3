"""HTTP routers: student CRUD at the root, health and version under meta."""

from .meta import router as meta_router
from .students import router as students_router

__all__ = [
    "meta_router",
    "students_router",
]
