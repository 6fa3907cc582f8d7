from fastapi import APIRouter

from .bookmarks import router as bookmarks_router
from .posts import router as posts_router
from .reference_data import router as reference_data_router

api_router = APIRouter()
api_router.include_router(posts_router, prefix="/posts", tags=["posts"])
api_router.include_router(bookmarks_router, prefix="/bookmarks", tags=["bookmarks"])
api_router.include_router(
    reference_data_router, prefix="/reference-data", tags=["reference-data"]
)
