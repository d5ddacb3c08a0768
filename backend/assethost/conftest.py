import os

# Ensure TEST=1 before anything else, so we always run in test mode
os.environ["TEST"] = "1"

import io  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient  # noqa: E402
from httpx._transports.asgi import ASGITransport  # noqa: E402
from PIL import Image  # noqa: E402
from assethost.config import TestConfig  # noqa: E402
from assethost.fastapi import create_app  # noqa: E402


def make_image_bytes(size=(400, 200), image_format="PNG", color=(200, 40, 40)) -> bytes:
    image = Image.new("RGB", size, color)
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def image_bytes():
    return make_image_bytes


@pytest.fixture
def config(tmp_path):
    config = TestConfig()
    config.UPLOADS_DIR = tmp_path / "uploads"
    config.THUMBNAILS_DIR = tmp_path / "thumbnails"
    return config


@pytest.fixture
def uploads_dir(config):
    config.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    return config.UPLOADS_DIR


@pytest.fixture
def thumbnails_dir(config):
    config.THUMBNAILS_DIR.mkdir(parents=True, exist_ok=True)
    return config.THUMBNAILS_DIR


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def thumbnails(app):
    return app.state.thumbnails


@pytest_asyncio.fixture
async def no_auth_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await app.state.thumbnails.drain()


@pytest_asyncio.fixture
async def admin_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", auth=("admin", "testpassword")) as ac:
        yield ac
    await app.state.thumbnails.drain()
