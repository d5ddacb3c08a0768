import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi.staticfiles import StaticFiles
from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from assethost import __version__
from assethost.api import api_public, api_admin
from assethost.config import Config, get_config
from assethost.middleware import AdminAuthMiddleware
from assethost.utils.sentry import initialize_sentry
from assethost.utils.thumbnails import ThumbnailCache

@asynccontextmanager
async def lifespan(app: FastAPI):
    config = app.state.config
    initialize_sentry(config)
    logging.info(f"Server is running at http://localhost:{config.PORT}")
    yield
    # let thumbnails that are already being written finish
    await app.state.thumbnails.drain()

def create_app(config: Optional[Config] = None) -> FastAPI:
    config = config or get_config()
    for directory in (config.UPLOADS_DIR, config.THUMBNAILS_DIR):
        directory.mkdir(parents=True, exist_ok=True)

    app = FastAPI(title=config.SITE_TITLE, version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.thumbnails = ThumbnailCache(config.UPLOADS_DIR, config.THUMBNAILS_DIR, config.THUMBNAIL_SIZE)
    app.add_middleware(GZipMiddleware)
    app.add_middleware(AdminAuthMiddleware)

    app.include_router(api_public)
    app.include_router(api_admin, prefix="/admin")

    app.mount("/uploads", StaticFiles(directory=config.UPLOADS_DIR), name="uploads")
    app.mount("/assets", StaticFiles(directory=config.ASSETS_DIR), name="assets")
    return app

def main():
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    config = get_config()
    uvicorn.run("assethost.fastapi:create_app", factory=True, host=config.HOST, port=config.PORT)

if __name__ == '__main__':
    main()
