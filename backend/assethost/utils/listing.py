from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Optional
from urllib.parse import quote

from jinja2 import Environment, PackageLoader, select_autoescape

from assethost.utils.file_store import file_extension, is_image

# Font Awesome classes
ICON_MAPPING = MappingProxyType({
    "zip": "fa-regular fa-file-archive",
    "pdf": "fa-regular fa-file-pdf",
    "doc": "fa-regular fa-file-word",
    "docx": "fa-regular fa-file-word",
    "xls": "fa-regular fa-file-excel",
    "xlsx": "fa-regular fa-file-excel",
    "ppt": "fa-regular fa-file-powerpoint",
    "pptx": "fa-regular fa-file-powerpoint",
    "txt": "fa-regular fa-file-lines",
    "mp3": "fa-regular fa-file-audio",
    "mp4": "fa-regular fa-file-video",
    "csv": "fa-regular fa-file-csv",
    "json": "fa-regular fa-file-code",
})
DEFAULT_ICON = "fa-regular fa-file"

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
URI_COMPONENT_SAFE = "!*'()"

templates = Environment(
    loader=PackageLoader("assethost", "templates"),
    autoescape=select_autoescape(["html"]),
)


@dataclass(frozen=True)
class ListingEntry:
    name: str
    extension: str
    url: str
    thumbnail_url: Optional[str] = None
    icon_class: Optional[str] = None


def icon_for(extension: str) -> str:
    return ICON_MAPPING.get(extension, DEFAULT_ICON)


def asset_url(name: str) -> str:
    return f"/uploads/{quote(name, safe=URI_COMPONENT_SAFE)}"


def thumbnail_url(name: str) -> str:
    return f"/thumbnails/{quote(name, safe=URI_COMPONENT_SAFE)}.png"


def build_entry(name: str) -> ListingEntry:
    extension = file_extension(name)
    if is_image(name):
        return ListingEntry(name=name, extension=extension, url=asset_url(name), thumbnail_url=thumbnail_url(name))
    return ListingEntry(name=name, extension=extension, url=asset_url(name), icon_class=icon_for(extension))


def render_listing(entries: Iterable[ListingEntry], title: str = "Assets") -> str:
    return templates.get_template("index.html").render(title=title, entries=list(entries))


def render_admin(title: str = "Assets") -> str:
    return templates.get_template("admin.html").render(title=title)
