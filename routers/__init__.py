from .users import router as users_router
from .properties import router as properties_router
from .tasks import router as tasks_router

__all__ = ["users_router", "properties_router", "tasks_router"]
