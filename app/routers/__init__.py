from fastapi import APIRouter

from . import users
from . import workspaces
from . import requests
from . import day_passes
from . import posts

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(workspaces.router, prefix="/workspaces", tags=["workspaces"])
api_router.include_router(requests.router, prefix="/requests", tags=["requests"])
api_router.include_router(day_passes.router, prefix="/daypass", tags=["day passes"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
