from .imports import router as import_router
from .workouts import router as workouts_router
from .progress import router as progress_router
from .wellness import router as wellness_router

__all__ = [
    "import_router",
    "workouts_router",
    "progress_router",
    "wellness_router",
]
