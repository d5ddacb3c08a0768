import asyncio
import logging
import os
import tempfile
from functools import partial
from pathlib import Path
from typing import Iterable, Optional

from PIL import Image

THUMBNAIL_SIZE = (100, 100)
PNG_MODES = {"1", "L", "LA", "I", "P", "RGB", "RGBA"}


def render_thumbnail(source_path: Path, target_path: Path, size: tuple[int, int] = THUMBNAIL_SIZE) -> Path:
    """
    Shrink `source_path` to fit inside `size` (aspect ratio preserved, never
    enlarged) and write it as PNG to `target_path`.

    The PNG is encoded into a temporary file next to the target and renamed
    into place, so the target either does not exist or is complete.
    """
    with Image.open(source_path) as source:
        thumbnail = source.copy()
    resample = Image.Resampling.LANCZOS if hasattr(Image, "Resampling") else Image.LANCZOS
    thumbnail.thumbnail(size, resample)
    if thumbnail.mode not in PNG_MODES:
        thumbnail = thumbnail.convert("RGBA")

    target_path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=target_path.parent, prefix=".", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as temp_file:
            thumbnail.save(temp_file, format="PNG")
        os.replace(temp_name, target_path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    return target_path


class ThumbnailCache:
    """
    PNG thumbnails for the images in `uploads_dir`, stored flat in
    `thumbnails_dir` as `<asset name>.png`.

    An existing thumbnail file is always trusted: it is never compared with
    its source, so replacing an original on disk leaves the old thumbnail in
    place until something calls `generate` for it again.

    Generations run in worker threads and are tracked per asset name while in
    flight, so concurrent requests for the same missing thumbnail share one
    piece of work. The tracker is only touched from the event loop.
    """

    def __init__(self, uploads_dir: Path, thumbnails_dir: Path, size: tuple[int, int] = THUMBNAIL_SIZE):
        self.uploads_dir = Path(uploads_dir)
        self.thumbnails_dir = Path(thumbnails_dir)
        self.size = size
        self._pending: dict[str, asyncio.Task] = {}

    def source_path(self, asset_name: str) -> Path:
        return self.uploads_dir / asset_name

    def thumbnail_path(self, asset_name: str) -> Path:
        return self.thumbnails_dir / f"{asset_name}.png"

    def is_pending(self, asset_name: str) -> bool:
        return asset_name in self._pending

    async def ensure_thumbnail(self, asset_name: str) -> Path:
        """
        Return the thumbnail path for `asset_name`, scheduling a background
        generation if the file does not exist yet. Does not wait for it.
        """
        paths = await self.ensure_thumbnails([asset_name])
        return paths[0]

    async def ensure_thumbnails(self, asset_names: Iterable[str]) -> list[Path]:
        """
        `ensure_thumbnail` for a batch of names. The existence checks run in
        one worker thread call.
        """
        asset_names = list(asset_names)
        candidates = [name for name in asset_names if name not in self._pending]
        existing = await asyncio.to_thread(self._existing, candidates)
        for name in candidates:
            # another request may have scheduled it while the checks ran
            if name not in existing and name not in self._pending:
                self.generate(name)
        return [self.thumbnail_path(name) for name in asset_names]

    def _existing(self, asset_names: list[str]) -> set[str]:
        return {name for name in asset_names if self.thumbnail_path(name).exists()}

    def generate(self, asset_name: str) -> asyncio.Task:
        """
        Schedule a generation for `asset_name` regardless of what is on disk.
        A generation already in flight for the same name finishes first.
        """
        previous = self._pending.get(asset_name)
        task = asyncio.create_task(self._generate(asset_name, previous))
        self._pending[asset_name] = task
        task.add_done_callback(partial(self._forget, asset_name))
        return task

    async def wait(self, asset_name: str) -> Optional[Path]:
        task = self._pending.get(asset_name)
        if task is None:
            return None
        # the generation keeps running if the waiter is cancelled
        return await asyncio.shield(task)

    async def drain(self):
        while self._pending:
            await asyncio.gather(*list(self._pending.values()), return_exceptions=True)

    async def _generate(self, asset_name: str, previous: Optional[asyncio.Task]) -> Optional[Path]:
        if previous is not None:
            await asyncio.wait([previous])
        source_path = self.source_path(asset_name)
        thumb_path = self.thumbnail_path(asset_name)
        try:
            await asyncio.to_thread(render_thumbnail, source_path, thumb_path, self.size)
        except Exception as e:
            logging.error(f"Error generating thumbnail for {asset_name}: {e}")
            return None
        logging.info(f"Generated thumbnail {thumb_path}")
        return thumb_path

    def _forget(self, asset_name: str, task: asyncio.Task):
        if self._pending.get(asset_name) is task:
            del self._pending[asset_name]
