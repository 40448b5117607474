from fastapi import APIRouter

from movieworld.api.routes import catalog, genres, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(catalog.router)
api_router.include_router(genres.router)
