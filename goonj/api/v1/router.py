# ============================================================================
# FILE: goonj/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from goonj.api.v1.endpoints import songs, playlists, auth, health

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(songs.router, prefix="/songs", tags=["songs"])
api_router.include_router(playlists.router, prefix="/playlists", tags=["playlists"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
