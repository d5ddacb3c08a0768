from fastapi import Request

from assethost.config import Config
from assethost.utils.thumbnails import ThumbnailCache


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_thumbnail_cache(request: Request) -> ThumbnailCache:
    return request.app.state.thumbnails
