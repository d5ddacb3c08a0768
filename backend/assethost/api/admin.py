import asyncio
import logging
from pathlib import PurePosixPath, PureWindowsPath
from typing import Optional

from fastapi import Depends, File, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from assethost.config import Config
from assethost.dependencies import get_config, get_thumbnail_cache
from assethost.utils.file_store import is_image
from assethost.utils.listing import render_admin
from assethost.utils.thumbnails import ThumbnailCache
from . import api_admin


def _upload_filename(filename: Optional[str]) -> Optional[str]:
    """Keep the uploaded name as-is, minus any directory components."""
    if not filename:
        return None
    name = PurePosixPath(PureWindowsPath(filename).name).name
    name = name.replace("\0", "").strip()
    if name in ("", ".", ".."):
        return None
    return name


@api_admin.get("", response_class=HTMLResponse)
async def admin_page(config: Config = Depends(get_config)):
    return HTMLResponse(render_admin(title=config.SITE_TITLE))


@api_admin.post("/upload")
async def upload_files(
    files: list[UploadFile] = File(...),
    config: Config = Depends(get_config),
    thumbnails: ThumbnailCache = Depends(get_thumbnail_cache),
):
    for upload in files:
        filename = _upload_filename(upload.filename)
        if filename is None:
            logging.warning(f"Skipping upload with unusable filename: {upload.filename!r}")
            await upload.close()
            continue

        try:
            contents = await upload.read()
            await asyncio.to_thread((config.UPLOADS_DIR / filename).write_bytes, contents)
        except OSError as e:
            logging.error(f"Error storing upload {filename}: {e}")
            continue
        finally:
            await upload.close()

        logging.info(f"Stored upload {filename} ({len(contents)} bytes)")
        if is_image(filename):
            thumbnails.generate(filename)

    return RedirectResponse(url="/admin", status_code=303)
