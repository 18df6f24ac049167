"""API route aggregation.

All routers registered here get mounted in main.py.

The authentication gate runs for every route (it is an app-wide
dependency, see main.create_app). Authorization is applied here at the
include_router level: protected routers require a bound Principal.
Health and auth routers are open.
"""

from fastapi import APIRouter, Depends

from yogastudio.api.auth import router as auth_router
from yogastudio.api.health import router as health_router
from yogastudio.api.sessions import router as sessions_router
from yogastudio.api.teachers import router as teachers_router
from yogastudio.api.users import router as users_router
from yogastudio.auth.dependencies import get_current_principal

# All protected routers require an authenticated principal
_auth = [Depends(get_current_principal)]

api_router = APIRouter(prefix="/api")

# Open routes
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes: a valid bearer token is required
api_router.include_router(sessions_router, tags=["sessions"], dependencies=_auth)
api_router.include_router(teachers_router, tags=["teachers"], dependencies=_auth)
api_router.include_router(users_router, tags=["users"], dependencies=_auth)
