import logging

from fastapi import Depends, HTTPException
from fastapi.responses import HTMLResponse

from assethost.config import Config
from assethost.dependencies import get_config, get_thumbnail_cache
from assethost.utils.file_store import is_image, list_assets
from assethost.utils.listing import build_entry, render_listing
from assethost.utils.thumbnails import ThumbnailCache
from . import api_public


@api_public.get("/", response_class=HTMLResponse)
async def list_files(config: Config = Depends(get_config), thumbnails: ThumbnailCache = Depends(get_thumbnail_cache)):
    try:
        names = await list_assets(config.UPLOADS_DIR)
    except OSError as e:
        logging.error(f"Error reading files directory {config.UPLOADS_DIR}: {e}")
        raise HTTPException(status_code=500, detail="Error reading files directory")

    # generations, if needed, finish after the response is sent
    await thumbnails.ensure_thumbnails([name for name in names if is_image(name)])
    entries = [build_entry(name) for name in names]
    return HTMLResponse(render_listing(entries, title=config.SITE_TITLE))
