import asyncio
import logging
import os
from pathlib import Path

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp"})
ALLOWED_EXTENSIONS = IMAGE_EXTENSIONS | {"zip"}


def file_extension(name: str) -> str:
    # ".jpg" alone is a hidden file without an extension
    return os.path.splitext(name)[1][1:].lower()


def is_image(name: str) -> bool:
    return file_extension(name) in IMAGE_EXTENSIONS


def is_allowed(name: str) -> bool:
    return file_extension(name) in ALLOWED_EXTENSIONS


def _is_utf8_name(name: str) -> bool:
    # os.listdir hands back undecodable bytes as lone surrogates
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def scan_directory(directory: Path) -> list[str]:
    """
    Return the entry names in `directory` that carry a permitted extension.

    Names that are not valid UTF-8 cannot be linked to, so they are logged
    and left out. The order is whatever the operating system enumerates;
    callers must not rely on it. Raises OSError if the directory cannot be
    read.
    """
    names = []
    for name in os.listdir(directory):
        if not _is_utf8_name(name):
            logging.warning(f"Skipping {os.fsencode(name)!r} in {directory}: file name is not valid UTF-8")
            continue
        if is_allowed(name):
            names.append(name)
    return names


async def list_assets(directory: Path) -> list[str]:
    return await asyncio.to_thread(scan_directory, directory)
