import asyncio

from fastapi import Depends, HTTPException
from fastapi.responses import FileResponse

from assethost.dependencies import get_thumbnail_cache
from assethost.utils.thumbnails import ThumbnailCache
from . import api_public


@api_public.get("/thumbnails/{thumbnail_name}")
async def get_thumbnail(thumbnail_name: str, thumbnails: ThumbnailCache = Depends(get_thumbnail_cache)):
    """
    Serve a generated thumbnail. If the thumbnail is still being generated,
    wait for that generation instead of answering 404.
    """
    if thumbnail_name in (".", "..") or not thumbnail_name.endswith(".png"):
        raise HTTPException(status_code=404, detail="Thumbnail not found")

    asset_name = thumbnail_name[:-len(".png")]
    if thumbnails.is_pending(asset_name):
        await thumbnails.wait(asset_name)

    thumb_path = thumbnails.thumbnail_path(asset_name)
    if not await asyncio.to_thread(thumb_path.is_file):
        raise HTTPException(status_code=404, detail="Thumbnail not found")

    return FileResponse(thumb_path, media_type="image/png", headers={"Cache-Control": "no-cache"})
