import asyncio
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from assethost.api.auth import security, verify_admin_credentials

ADMIN_PREFIX = "/admin"

class AdminAuthMiddleware(BaseHTTPMiddleware):
    """
    HTTP basic auth for everything under /admin. Runs before routing, so an
    unauthenticated upload is refused without its body ever being read.
    """
    async def dispatch(self, request: Request, call_next):
        path = request.scope["path"]
        if path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/"):
            try:
                credentials = await security(request)
                # password hashing is slow, keep it off the event loop
                await asyncio.to_thread(verify_admin_credentials, credentials, request.app.state.config)
            except HTTPException as exc:
                return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)

        response = await call_next(request)
        return response
