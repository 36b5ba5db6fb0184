from src.app.router.v1.comment import router as comment_router
from src.app.router.v1.interaction import router as interaction_router
from src.app.router.v1.pet import router as pet_router
from src.app.router.v1.post import router as post_router

__all__ = [
    "comment_router",
    "interaction_router",
    "pet_router",
    "post_router",
]
