from fastapi import APIRouter

# - api_public: listing and file routes, no authentication required
# - api_admin: mounted under /admin behind HTTP basic auth (see middleware.AdminAuthMiddleware)

api_public = APIRouter()
api_admin = APIRouter()

from .listing import *  # noqa: E402, F403
from .files import *  # noqa: E402, F403
from .admin import *  # noqa: E402, F403
